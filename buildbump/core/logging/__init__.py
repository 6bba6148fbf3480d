from .logging_manager import logging_manager, LoggingManager
from .logging_config import configure_logging

__all__ = ["logging_manager", "LoggingManager", "configure_logging"]
