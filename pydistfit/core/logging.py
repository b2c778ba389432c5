"""Logging setup helpers with optional JSON output.

Library modules only call ``logging.getLogger(__name__)``; handlers are
attached by applications through :func:`configure_logging`.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

DEFAULT_FIELDS = ("component", "family", "estimator", "metric", "duration_ms")


class JSONFormatter(logging.Formatter):
    """JSON formatter adding contextual fields when present."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in DEFAULT_FIELDS:
            if hasattr(record, name):
                payload[name] = getattr(record, name)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


class _ContextFilter(logging.Filter):
    def __init__(self, component: Optional[str]):
        super().__init__()
        self.component = component

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if self.component and not hasattr(record, "component"):
            record.component = self.component
        return True


def configure_logging(
    level: int = logging.INFO,
    json_output: bool = False,
    component: Optional[str] = None,
) -> logging.Logger:
    """Attach a stdout handler to the ``pydistfit`` logger.

    Repeated calls replace the previously installed handler.
    """
    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    handler.addFilter(_ContextFilter(component))

    root = logging.getLogger("pydistfit")
    root.handlers.clear()
    root.setLevel(level)
    root.addHandler(handler)
    return root


def get_logger(name: str, component: Optional[str] = None) -> logging.Logger:
    """Fetch a logger, optionally tagging its records with a component."""
    logger = logging.getLogger(name)
    if component:
        logger.addFilter(_ContextFilter(component))
    return logger
