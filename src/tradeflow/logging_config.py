from __future__ import annotations

import logging

from tradeflow.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    resolved = level if level is not None else Settings().log_level
    logging.basicConfig(level=resolved.upper(), format=LOG_FORMAT)
