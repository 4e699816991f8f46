"""Diagnostic logging switched on by EOS_UPGRADE_DEBUG."""

import logging
import os

DEBUG_ENV = "EOS_UPGRADE_DEBUG"


def configure_logging() -> None:
    """Enable debug logging if EOS_UPGRADE_DEBUG is set, warnings otherwise."""
    if os.getenv(DEBUG_ENV):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
