"""
Logging configuration shared by the Streamlit app and the export script.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_HANDLER_NAME = "permit_explorer"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Streamlit re-executes the script on every interaction, so this checks for
    an existing handler instead of stacking a new one per rerun.
    """
    logger = logging.getLogger("permit_explorer")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
