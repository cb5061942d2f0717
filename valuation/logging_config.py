"""Logging setup for the valuate CLI and the web app."""

import json
import logging
import sys
from typing import Any, Dict, Iterable

TEXT_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

# Record attributes set by the estimator via `extra=`
VALUATION_FIELDS = (
    "vehicle",
    "price_source",
    "brand_tier",
    "vehicle_age",
    "trend",
    "current_value",
)


def valuation_extra(record: logging.LogRecord) -> Dict[str, Any]:
    """Valuation fields attached to a record, if any."""
    return {
        name: getattr(record, name)
        for name in VALUATION_FIELDS
        if hasattr(record, name)
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line; valuation fields go under 'valuation'."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        valuation = valuation_extra(record)
        if valuation:
            entry["valuation"] = valuation
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(
    level: str = "WARNING",
    fmt: str = "text",
    quiet: Iterable[str] = (),
) -> None:
    """
    Replace root handlers with a single stderr handler.

    The CLI defaults to WARNING/text so tables stay readable on stdout;
    the web app passes INFO/json and quiets the werkzeug request log.

    Args:
        level: Level name, e.g. "DEBUG" (unknown names fall back to WARNING)
        fmt: "text" or "json"
        quiet: Logger names capped at WARNING
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))

    for h in root.handlers[:]:
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    root.addHandler(handler)

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)
