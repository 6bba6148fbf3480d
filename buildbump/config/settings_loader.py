"""Loading settings files and exporting the effective settings.

Settings files may be TOML, YAML or JSON; the format follows the file suffix.
"""

import enum
import json
from pathlib import Path
from typing import Any, Dict, Union

import tomli as toml_read
import tomli_w as toml_write
import yaml

from buildbump.config.settings import AppSettings
from buildbump.core.logging.logging_manager import logging_manager

logger = logging_manager.get_session("SettingsLoader")

SUFFIX_FORMATS = {
    ".toml": "toml",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".json": "json",
}


def parse_settings(data: str, format: str = "toml") -> Dict[str, Any]:
    """Parse serialized settings into a plain dictionary.

    Args:
        data (str): Serialized settings.
        format (str, optional): 'toml', 'yaml' or 'json'. Defaults to "toml".

    Returns:
        Dict[str, Any]: The parsed data.

    Raises:
        ValueError: If the format is unsupported or the data cannot be parsed.
    """
    try:
        if format.lower() == "toml":
            parsed = toml_read.loads(data)
        elif format.lower() == "json":
            parsed = json.loads(data)
        elif format.lower() == "yaml":
            parsed = yaml.safe_load(data)
        else:
            raise ValueError(f"Unsupported settings format: {format}")
    except (toml_read.TOMLDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValueError(f"Failed to parse {format} data: {e}") from e

    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Settings data must be a table/mapping, got {type(parsed).__name__}")
    return parsed


def load_settings_file(path: Union[str, Path]) -> AppSettings:
    """Load an ``AppSettings`` from a TOML, YAML or JSON file.

    Args:
        path (Union[str, Path]): Settings file.

    Returns:
        AppSettings: Validated settings.

    Raises:
        ValueError: If the suffix is unknown or the content is invalid.
        pydantic.ValidationError: If a value fails validation.
    """
    path = Path(path)
    format = SUFFIX_FORMATS.get(path.suffix.lower())
    if format is None:
        raise ValueError(f"Unsupported settings file type: '{path.suffix}' ({path})")

    data = parse_settings(path.read_text(encoding="utf-8"), format)
    settings = AppSettings(**data)
    logger.debug(f"Loaded settings from {path}: {len(settings.mappings)} mapping(s)")
    return settings


def make_serializable(obj: Any) -> Any:
    """Convert an object tree to plain serializable values."""
    if isinstance(obj, dict):
        return {k: make_serializable(v) for k, v in obj.items() if v is not None}
    elif isinstance(obj, list):
        return [make_serializable(i) for i in obj]
    elif isinstance(obj, Path):
        return str(obj)
    elif isinstance(obj, enum.Enum):
        return obj.value
    return obj


def export_settings(settings: AppSettings, format: str = "toml") -> str:
    """Export settings to a formatted string.

    Args:
        settings (AppSettings): Settings to export.
        format (str, optional): 'toml', 'json' or 'yaml'. Defaults to "toml".

    Returns:
        str: Serialized settings.

    Raises:
        ValueError: If the format is not supported.
    """
    settings_dict = make_serializable(settings.model_dump())

    if format.lower() == "toml":
        return toml_write.dumps(settings_dict)
    elif format.lower() == "json":
        return json.dumps(settings_dict, indent=2)
    elif format.lower() == "yaml":
        return yaml.dump(settings_dict, default_flow_style=False)
    else:
        raise ValueError(f"Unsupported export format: {format}")
