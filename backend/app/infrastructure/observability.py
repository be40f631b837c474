"""Mahasiswa API logging: one root handler, JSON lines or plain text.

Invariants:
    - Each JSON line has timestamp, level, logger, service, message
    - Request fields (method, path, status_code) and record fields (mahasiswa_id,
      error_code) are emitted only when the log call passed them via `extra`
    - Indonesian messages are written as-is (ensure_ascii=False)
    - The bearer token is never a log field; the token gate logs method and path only
    - setup_logging() replaces only the handler it installed, so repeated lifespans
      (tests, reload) do not duplicate lines

Design Decisions:
    - stdlib logging with a small formatter: uvicorn and SQLAlchemy log through the
      same root handler (python -m app passes log_config=None)
"""

import json
import logging
from datetime import datetime, timezone

SERVICE_NAME = "mahasiswa-api"

_EXTRA_FIELDS = (
    "method", "path", "status_code", "mahasiswa_id", "error_code",
)
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


class JSONFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        line = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": SERVICE_NAME,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                line[key] = val
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the service handler on the root logger (LOG_LEVEL, LOG_FORMAT)."""
    handler = logging.StreamHandler()
    handler.set_name(SERVICE_NAME)
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(_TEXT_FORMAT),
    )
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == SERVICE_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
