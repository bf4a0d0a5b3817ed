"""Log setup for the CLI: one stderr handler, text or JSON, tagged with a correlation ID."""

import contextvars
import logging
import sys
import traceback
import uuid
from pathlib import Path
from typing import Any

from pythonjsonlogger import jsonlogger

# Hey future me, one ID per CLI command. asyncio.gather copies the context into every
# task it starts, so the N path lookups of a bulk add log under the command's ID.
correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)

NOISY_LOGGERS = ("httpx", "httpcore", "asyncio")


def get_correlation_id() -> str:
    """Correlation ID of the running command, "" outside one."""
    return correlation_id_var.get()


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Start a new correlation scope; a fresh UUID4 when no ID is given."""
    correlation_id = correlation_id or str(uuid.uuid4())
    correlation_id_var.set(correlation_id)
    return correlation_id


class CorrelationIdFilter(logging.Filter):
    """Stamps `correlation_id` on every record passing the handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id()
        return True


class CompactExceptionFormatter(logging.Formatter):
    """Text formatter that prints an exception chain root cause first.

    Each exception gets one ╰─► line; only frames from our own package are
    kept, since httpx/httpcore frames say nothing when a server is down:

    12:00:01 │ ERROR   │ playdeck.__main__:88 │ add-all failed
    ╰─► ConnectError: All connection attempts failed
    ╰─► ServiceUnavailableError: catalog: GET /pathOfMusic failed: ...
        File "base_client.py", line 104, in _request
          raise ServiceUnavailableError(
    """

    PACKAGE_MARKER = "playdeck"

    def formatException(self, ei: Any) -> str:
        _, exc_value, _ = ei
        if exc_value is None:
            return ""

        chain: list[BaseException] = []
        current: BaseException | None = exc_value
        while current is not None and current not in chain:
            chain.append(current)
            current = current.__cause__ or current.__context__

        lines: list[str] = []
        for exc in reversed(chain):
            lines.append(f"╰─► {type(exc).__name__}: {exc}")
            lines.extend(self._own_frames(exc))
        return "\n".join(lines)

    def _own_frames(self, exc: BaseException) -> list[str]:
        if exc.__traceback__ is None:
            return []
        lines: list[str] = []
        for frame in traceback.extract_tb(exc.__traceback__):
            if "/site-packages/" in frame.filename or self.PACKAGE_MARKER not in frame.filename:
                continue
            lines.append(
                f'    File "{Path(frame.filename).name}", line {frame.lineno}, in {frame.name}'
            )
            if frame.line:
                lines.append(f"      {frame.line.strip()}")
        return lines


class CustomJsonFormatter(jsonlogger.JsonFormatter):  # type: ignore[name-defined,misc]
    """One JSON object per line with level, logger, source location and correlation ID."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record.update(
            timestamp=self.formatTime(record, self.datefmt),
            level=record.levelname,
            logger=record.name,
            location=f"{record.module}.{record.funcName}:{record.lineno}",
        )
        correlation_id = getattr(record, "correlation_id", "")
        if correlation_id:
            log_record["correlation_id"] = correlation_id


# Listen future me, the CLI calls this once before running a command. Existing root
# handlers are removed first, so calling it again (tests do) never stacks handlers.
def configure_logging(log_level: str = "INFO", json_format: bool = False) -> None:
    """Route all logging to a single stderr handler.

    stdout is reserved for command output, so logs never mix with it.

    Args:
        log_level: Root level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: JSON lines instead of the compact text format
    """
    level = logging.getLevelNamesMapping().get(log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.addFilter(CorrelationIdFilter())
    if json_format:
        handler.setFormatter(
            CustomJsonFormatter("%(message)s", datefmt="%Y-%m-%dT%H:%M:%S")
        )
    else:
        handler.setFormatter(
            CompactExceptionFormatter(
                fmt="%(asctime)s │ %(levelname)-7s │ %(name)s:%(lineno)d │ %(message)s",
                datefmt="%H:%M:%S",
            )
        )

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    # httpx logs every request at INFO
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        "Logging configured (level=%s, json=%s)", logging.getLevelName(level), json_format
    )
