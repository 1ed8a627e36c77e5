"""Structured logging for the wellness tracker.

Every ``logging.getLogger(__name__)`` call site goes through structlog's
``ProcessorFormatter``, so records carry the calling user's id and the
current OpenTelemetry trace/span ids without any change at the call site.

``fmt="text"`` renders coloured console lines, ``fmt="json"`` renders JSON
lines. With ``log_root`` set, JSON copies also go to ``app.log`` (everything)
and ``http.log`` (uvicorn/httpx transport chatter) under that directory.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar, Token
from pathlib import Path

import structlog
from opentelemetry import trace

_user_context: ContextVar[str | None] = ContextVar("wellness_user_id", default=None)

_NOISE_LOGGERS = (
    "uvicorn.access",
    "uvicorn.error",
    "httpx",
    "httpcore",
    "asyncio",
)

_ZERO_TRACE = "0" * 32
_ZERO_SPAN = "0" * 16


def set_user_context(user_id: str | None) -> Token:
    """Attribute log records in the current async context to *user_id*."""
    return _user_context.set(user_id)


def reset_user_context(token: Token) -> None:
    _user_context.reset(token)


def get_user_context() -> str | None:
    return _user_context.get()


def add_user_context(logger, method_name, event_dict: dict) -> dict:  # noqa: ARG001
    event_dict["user_id"] = _user_context.get()
    return event_dict


def add_otel_context(logger, method_name, event_dict: dict) -> dict:  # noqa: ARG001
    """Stamp ``trace_id``/``span_id`` from the active span (zeros outside a span)."""
    span_ctx = trace.get_current_span().get_span_context()
    if span_ctx is not None and span_ctx.trace_id:
        event_dict["trace_id"] = f"{span_ctx.trace_id:032x}"
        event_dict["span_id"] = f"{span_ctx.span_id:016x}"
    else:
        event_dict["trace_id"] = _ZERO_TRACE
        event_dict["span_id"] = _ZERO_SPAN
    return event_dict


def _pre_chain(time_fmt: str) -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt=time_fmt),
        add_user_context,
        add_otel_context,
        structlog.stdlib.ExtraAdder(),
    ]


def _formatter(
    renderer: structlog.types.Processor,
    pre_chain: list[structlog.types.Processor],
) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        foreign_pre_chain=pre_chain,
    )


def _json_file(path: Path) -> logging.FileHandler:
    handler = logging.FileHandler(path)
    handler.setFormatter(_formatter(structlog.processors.JSONRenderer(), _pre_chain("iso")))
    handler.setLevel(logging.DEBUG)
    return handler


def _drop_handlers(target: logging.Logger) -> None:
    for handler in list(target.handlers):
        target.removeHandler(handler)
        handler.close()


def configure_logging(
    level: str = "INFO",
    fmt: str = "text",
    log_root: Path | str | None = None,
) -> None:
    """Install the structlog formatter on the root logger.

    Safe to call more than once; handlers from an earlier call are closed
    and replaced, on the root and on the transport loggers alike.

    Parameters
    ----------
    level:
        Root level name, case-insensitive. Unknown names fall back to INFO.
    fmt:
        ``"text"`` or ``"json"`` for the console.
    log_root:
        Optional directory for the JSON ``app.log``/``http.log`` files.
    """
    if fmt == "json":
        pre_chain = _pre_chain("iso")
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        pre_chain = _pre_chain("%H:%M:%S")
        renderer = structlog.dev.ConsoleRenderer()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(_formatter(renderer, pre_chain))

    root = logging.getLogger()
    _drop_handlers(root)
    root.addHandler(console)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    noisy = [logging.getLogger(name) for name in _NOISE_LOGGERS]
    for noisy_logger in noisy:
        _drop_handlers(noisy_logger)
        noisy_logger.setLevel(logging.WARNING)

    if log_root is not None:
        directory = Path(log_root)
        directory.mkdir(parents=True, exist_ok=True)
        root.addHandler(_json_file(directory / "app.log"))
        http_log = _json_file(directory / "http.log")
        for noisy_logger in noisy:
            noisy_logger.addHandler(http_log)

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
