"""Process-wide logging setup, called once by the entry point."""

import logging

from buildbump.core.logging.logging_manager import logging_manager, DEFAULT_FORMAT, StyledFormatter


def configure_logging(enable_styling: bool = False, level: int = logging.INFO) -> None:
    """Configure the shared console handler.

    Args:
        enable_styling (bool): Colour level names. Only sensible when stdout is a TTY;
            build servers capture plain text.
        level (int): Initial log level for every session.
    """
    if enable_styling:
        logging_manager.set_formatter(StyledFormatter(DEFAULT_FORMAT))
    else:
        logging_manager.set_formatter(logging.Formatter(DEFAULT_FORMAT))
    logging_manager.set_log_level(level)
