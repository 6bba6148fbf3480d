"""Build metadata over the build server's REST API."""

import asyncio
from typing import Any, Dict, Optional
from urllib.parse import quote

import aiohttp

from buildbump.config.service_settings import EBuildBackend
from buildbump.core.logging.logging_manager import logging_manager
from buildbump.services.base import BuildRecord, BuildService, ServiceError
from buildbump.services.registry import BuildServiceRegistry

logger = logging_manager.get_session("RestBuildService")


def parse_build_id(build_uri: str) -> str:
    """Extract the numeric build id from a build URI such as ``vstfs:///Build/Build/42``.

    Raises:
        ValueError: If the URI does not end in a numeric id.
    """
    build_id = build_uri.rstrip("/").rsplit("/", 1)[-1]
    if not build_id.isdigit():
        raise ValueError(f"Cannot extract a build id from '{build_uri}'")
    return build_id


@BuildServiceRegistry.register(EBuildBackend.REST)
class RestBuildService(BuildService):
    """Reads and updates a build through ``_apis/build/builds/{id}``."""

    # BuildRecord field -> REST field
    FIELDS = {
        "number": "buildNumber",
        "label": "labelName",
        "drop_location": "dropLocation",
    }

    def build_url(self, build_uri: str) -> str:
        base = self._environment.collection_uri.rstrip("/")
        if self._environment.team_project:
            base = f"{base}/{quote(self._environment.team_project)}"
        return f"{base}/_apis/build/builds/{parse_build_id(build_uri)}"

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._environment.access_token:
            headers["Authorization"] = f"Bearer {self._environment.access_token}"
        return headers

    async def _request(self, method: str, url: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        params = {"api-version": self._settings.services.api_version}
        async with aiohttp.ClientSession(headers=self._headers()) as session:
            async with session.request(method, url, params=params, json=payload) as response:
                response.raise_for_status()
                return await response.json(content_type=None)

    def _call(self, method: str, build_uri: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            url = self.build_url(build_uri)
        except ValueError as e:
            raise ServiceError(str(e)) from e

        logger.debug(f"{method} {url}")
        try:
            return asyncio.run(self._request(method, url, payload))
        except aiohttp.ClientError as e:
            raise ServiceError(f"{method} {url} failed: {e}") from e

    def get_build(self, build_uri: str) -> BuildRecord:
        data = self._call("GET", build_uri)
        values = {field: data.get(rest_field) for field, rest_field in self.FIELDS.items()}
        values["number"] = values["number"] or ""
        return BuildRecord(uri=build_uri, **values)

    def save_build(self, record: BuildRecord) -> None:
        payload = {}
        for field, rest_field in self.FIELDS.items():
            value = getattr(record, field)
            if value is not None:
                payload[rest_field] = value
        self._call("PATCH", record.uri, payload)
        logger.info(f"Saved build {record.uri}: number '{record.number}'")
