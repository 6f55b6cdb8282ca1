"""
Process-wide logging setup.

Modules log through `logging.getLogger(__name__)` with key=value messages,
e.g. `logger.info("publisher_created id=%s", publisher_id)`.
"""

from __future__ import annotations

import logging

from . import config

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging() -> None:
    level = logging.getLevelName(config.log_level())
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=_FORMAT)
    root.setLevel(level)
