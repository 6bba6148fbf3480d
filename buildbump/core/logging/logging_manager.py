"""Centralized logger sessions for buildbump.

Every component asks the shared ``logging_manager`` for a named session instead of
configuring handlers on its own. The manager owns the console handler, so a single
call to ``set_log_level`` adjusts the verbosity of the whole pipeline.
"""

import logging
import sys
from typing import Dict, Optional

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class StyledFormatter(logging.Formatter):
    """Formatter that colours the level name for interactive terminals."""

    COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        original = record.levelname
        color = self.COLORS.get(record.levelno)
        if color:
            record.levelname = f"{color}{original}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


class LoggingManager:
    """Owns the root ``buildbump`` logger and hands out named sessions."""

    ROOT_NAME = "buildbump"

    def __init__(self):
        self._root = logging.getLogger(self.ROOT_NAME)
        self._root.propagate = False
        self._handler = logging.StreamHandler(sys.stdout)
        self._handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        self._root.addHandler(self._handler)
        self._sessions: Dict[str, logging.Logger] = {}
        self.set_log_level(logging.INFO)

    @property
    def log_level(self) -> int:
        """Current level of the shared root logger."""
        return self._root.level

    def set_log_level(self, level: int) -> None:
        """Set the level of the root logger and every session handed out so far.

        Args:
            level (int): A ``logging`` level constant.
        """
        self._root.setLevel(level)
        for session in self._sessions.values():
            session.setLevel(level)

    def set_formatter(self, formatter: logging.Formatter) -> None:
        """Replace the formatter used by the shared console handler."""
        self._handler.setFormatter(formatter)

    def get_session(self, name: str, formatter: Optional[logging.Formatter] = None) -> logging.Logger:
        """Get (or create) a named logger below the ``buildbump`` root.

        Args:
            name (str): Component name, e.g. ``"VersionLocator"``.
            formatter (logging.Formatter, optional): Dedicated formatter for this
                session. When given, the session gets its own handler and stops
                propagating to the shared one.

        Returns:
            logging.Logger: The session logger.
        """
        if name.startswith(self.ROOT_NAME + "."):
            full_name = name
        else:
            full_name = f"{self.ROOT_NAME}.{name}"

        session = self._sessions.get(full_name)
        if session is None:
            session = logging.getLogger(full_name)
            session.setLevel(self._root.level)
            self._sessions[full_name] = session

        if formatter is not None:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(formatter)
            session.handlers = [handler]
            session.propagate = False
        return session


logging_manager = LoggingManager()
