"""Logging setup shared by the front end modules."""

import logging

from clinic_portal.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger once per process.

    Streamlit re-executes the app script on every interaction, so repeated
    calls must not stack handlers.
    """
    global _configured
    if _configured:
        return

    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
    # requests/urllib3 are chatty at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
