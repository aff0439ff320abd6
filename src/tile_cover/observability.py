from __future__ import annotations

import contextvars
import json
import logging
import sys
import uuid
from datetime import datetime, timezone
from typing import Any, Final, Optional, TextIO

_run_id_ctx: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "run_id", default=None
)


def generate_run_id() -> str:
    return uuid.uuid4().hex


def get_run_id() -> Optional[str]:
    return _run_id_ctx.get()


def set_run_id(run_id: Optional[str]) -> contextvars.Token:
    return _run_id_ctx.set(run_id)


def reset_run_id(token: contextvars.Token) -> None:
    _run_id_ctx.reset(token)


# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RECORD_ATTRS: Final[frozenset[str]] = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime", "run_id"}


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``run_id`` appears only inside a run."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, Any] = {
            "timestamp": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }

        run_id = getattr(record, "run_id", None)
        if run_id:
            payload["run_id"] = run_id

        payload["extra"] = {
            key: value for key, value in record.__dict__.items() if key not in _RECORD_ATTRS
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = self.formatStack(record.stack_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


_TEXT_FORMAT: Final[str] = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"

_LOGGING_CONFIGURED = False
_ORIGINAL_LOG_RECORD_FACTORY = logging.getLogRecordFactory()


def _log_record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
    record = _ORIGINAL_LOG_RECORD_FACTORY(*args, **kwargs)
    record.run_id = get_run_id()
    return record


def _resolve_level(log_level: str) -> int:
    level = logging.getLevelName(str(log_level).strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Invalid log level: {log_level!r}")
    return level


def configure_logging(
    *,
    log_level: str = "INFO",
    log_format: str = "json",
    stream: Optional[TextIO] = None,
    force: bool = False,
) -> None:
    """Install a single root handler; repeated calls are no-ops unless forced.

    Logs go to stderr by default so that stdout stays free for results. An
    unknown level raises ``ValueError`` before any handler is replaced.
    """

    global _LOGGING_CONFIGURED
    level = _resolve_level(log_level)
    if _LOGGING_CONFIGURED and not force:
        return

    handler = logging.StreamHandler(stream or sys.stderr)
    if log_format == "text":
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    else:
        handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)
    logging.setLogRecordFactory(_log_record_factory)

    _LOGGING_CONFIGURED = True
