"""Logging setup for the gateway.

Records logged while a request is being handled carry that request's short id,
rendered as a ``[Req: xxxxxxxx]`` prefix. The id lives in a ContextVar so that
concurrent requests on the same event loop never see each other's id.
"""

import contextvars
import logging
from collections.abc import Iterator
from contextlib import contextmanager

NOISY_HTTP_LOGGERS = (
    "httpx",
    "httpcore",
    "httpcore.http11",
    "httpcore.connection",
)

UVICORN_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error")

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

correlation_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id", default=None
)


def parse_log_level(raw: str) -> str:
    """``"debug  # noisy"`` -> ``"DEBUG"``; anything unrecognised -> ``"INFO"``."""
    words = raw.split()
    level = words[0].upper() if words else ""
    return level if level in VALID_LEVELS else "INFO"


def set_noisy_http_logger_levels(current_log_level: str) -> None:
    """httpx/httpcore chatter is only shown when the gateway itself runs at DEBUG."""
    level = logging.DEBUG if current_log_level == "DEBUG" else logging.WARNING
    for name in NOISY_HTTP_LOGGERS:
        logging.getLogger(name).setLevel(level)


class ConversationLogger:
    """Access to the request-scoped ``conversation`` logger."""

    @staticmethod
    def get_logger() -> logging.Logger:
        return logging.getLogger("conversation")

    @staticmethod
    @contextmanager
    def correlation_context(request_id: str) -> Iterator[None]:
        token = correlation_id_var.set(request_id)
        try:
            yield
        finally:
            correlation_id_var.reset(token)


class CorrelationIdFilter(logging.Filter):
    """Stamp the current request id onto records that do not carry one."""

    def filter(self, record: logging.LogRecord) -> bool:
        request_id = correlation_id_var.get()
        if request_id and getattr(record, "correlation_id", None) is None:
            record.correlation_id = request_id
        return True


class CorrelationFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        request_id = getattr(record, "correlation_id", None)
        if request_id:
            record.msg = f"[Req: {request_id[:8]}] {record.msg}"
        return super().format(record)


class HttpRequestLogDowngradeFilter(logging.Filter):
    """Relabel INFO records from the given logger prefixes as DEBUG.

    httpx logs every request line at INFO, which would otherwise drown the
    gateway's own INFO output.
    """

    def __init__(self, *prefixes: str) -> None:
        super().__init__()
        self.prefixes = tuple(prefixes)

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno == logging.INFO and record.name.startswith(self.prefixes):
            record.levelno = logging.DEBUG
            record.levelname = "DEBUG"
        return True


def configure_root_logging(log_level: str) -> None:
    """Route everything through one stderr handler at ``log_level``.

    Calling it again replaces the handler instead of adding a second one.
    """
    level = parse_log_level(log_level)

    handler = logging.StreamHandler()
    handler.setFormatter(
        CorrelationFormatter("%(asctime)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S")
    )
    for log_filter in (HttpRequestLogDowngradeFilter(*NOISY_HTTP_LOGGERS), CorrelationIdFilter()):
        handler.addFilter(log_filter)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    # uvicorn's access log duplicates the gateway's request logging
    for name in UVICORN_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    set_noisy_http_logger_levels(level)


conversation_logger = ConversationLogger.get_logger()
