"""Logging utilities for snyk-api."""

from __future__ import annotations

import json
import logging
import sys
from typing import TextIO

LOGGER_NAME = "snyk-api"


class StructuredFormatter(logging.Formatter):
    """
    Render log records as text or JSON lines.

    Records carrying a ``listed`` attribute are CLI output rows and are
    rendered as the entity itself; everything else is a plain log message.
    """

    def __init__(self, json_mode: bool = False):
        super().__init__()
        self.json_mode = json_mode

    def format(self, record: logging.LogRecord) -> str:
        entity = getattr(record, "listed", None)
        if entity is not None:
            if self.json_mode:
                return json.dumps(entity.to_dict())
            suffix = f"  {entity.detail}" if entity.detail else ""
            return f"[{entity.kind}] {entity.name} ({entity.id}){suffix}"

        message = record.getMessage()
        if self.json_mode:
            return json.dumps({"level": record.levelname, "message": message})
        return f"[{record.levelname:<7}] {message}"


def setup_logging(json_mode: bool = False, verbose: bool = False, stream: TextIO | None = None) -> logging.Logger:
    """Point the snyk-api logger at ``stream`` (stderr by default), replacing earlier handlers."""
    logger = logging.getLogger(LOGGER_NAME)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter(json_mode=json_mode))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger
