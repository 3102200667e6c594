"""Root logger setup for the CLI and the web app.

Entrypoints call ``setup_logging()`` first; everything under ``big_ocean``
logs through ``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging
import os
import sys

_TEXT_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
_JSON_FORMAT = (
    '{"time":"%(asctime)s","level":"%(levelname)s",'
    '"logger":"%(name)s","message":"%(message)s"}'
)

# HTTP and model-client chatter; only warnings and above get through.
_QUIET_LOGGERS = ("httpx", "httpcore", "openai", "langchain")


def setup_logging() -> None:
    """Install the root handler on stderr.

    ``LOG_LEVEL`` picks the threshold (INFO when unset or unknown) and
    ``LOG_FORMAT=json`` switches to one JSON object per line.
    """
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    use_json = os.getenv("LOG_FORMAT", "text").lower() == "json"

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=_JSON_FORMAT if use_json else _TEXT_FORMAT,
        datefmt="%Y-%m-%dT%H:%M:%S",
        stream=sys.stderr,
        force=True,
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
