"""
Logging setup.

Modules log through `logging.getLogger(__name__)` with key=value event
messages; this only wires the root handler once per process.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_logging(level: str = "INFO") -> None:
    resolved = logging.getLevelName((level or "INFO").upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    # No-op if the root logger already has handlers (e.g. under uvicorn --log-config).
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
