"""
Logging setup for the storefront backend.

Every module logs through the shared "storefront" logger; this module only
wires its handler and format once at startup.
"""

import logging
import sys

from config import settings

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logging(level: str | None = None) -> None:
    """
    Configures the root logging handlers for the application.

    Args:
        level (str | None): Log level name; defaults to ``settings.log_level``.
    """
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # Request lines from the Supabase HTTP client are noisy at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
