"""
Engine observers: where classification events go.

Engine functions that report anything take an optional `observer` argument.
An observer is any object with structlog's debug / info / warning methods:
a structlog bound logger, a caller's own logger, or a test double. When the
caller passes none, the engine module's own structlog logger is used.

Events emitted by the engine:

    profile_classified              debug    label, reasons, signal_kinds, sensitivity
    profile_classification_skipped  debug    reason="detector_disabled"
    catalog_loaded                  info     path, pattern_count, ...
    catalog_override_missing        warning  path
    catalog_override_unreadable     warning  path, error
    custom_pattern_invalid          warning  pattern, error
    sensitivity_unknown             warning  value, fallback
    settings_loaded                 info     the effective DetectorSettings

Default rendering is one JSON object per line on stderr (LOG_FORMAT=json)
or structlog's console renderer (LOG_FORMAT=console), filtered by LOG_LEVEL.
A host application that configures structlog itself keeps its configuration.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Protocol

import structlog

ENGINE_NAME = "profile_classifier"
OBSERVER_METHODS = ("debug", "info", "warning")


class Observer(Protocol):
    """Receiver of engine events; structlog bound loggers satisfy it."""

    def debug(self, event: str, **kw: Any) -> Any: ...

    def info(self, event: str, **kw: Any) -> Any: ...

    def warning(self, event: str, **kw: Any) -> Any: ...


def _level_from_env() -> int:
    level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").strip().upper(), None)
    return level if isinstance(level, int) else logging.INFO


def _add_timestamp(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
    return event_dict


def _tag_engine_event(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Tag the line with the engine name; the event name goes under event_type."""
    event_dict.setdefault("engine", ENGINE_NAME)
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def configure_logging(level: int | None = None, fmt: str | None = None) -> None:
    """
    Configure structlog for the engine's default observers.

    level and fmt default to LOG_LEVEL and LOG_FORMAT. Module loggers are
    lazy, so this takes effect for every engine module as long as it runs
    before their first event.
    """
    fmt = (fmt or os.getenv("LOG_FORMAT", "json")).strip().lower()
    if fmt == "json":
        renderer: Any = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            _add_timestamp,
            _tag_engine_event,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            _level_from_env() if level is None else level
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_logging()


def get_logger(name: str) -> Observer:
    """Default observer for an engine module: a lazy structlog logger with logger_name bound."""
    return structlog.get_logger(logger_name=name)


def resolve_observer(observer: Any, fallback: Observer) -> Observer:
    """
    Return the observer to report to: the injected one, else fallback.

    Raises TypeError for an injected object that lacks debug / info / warning.
    """
    if observer is None:
        return fallback
    if not all(callable(getattr(observer, m, None)) for m in OBSERVER_METHODS):
        raise TypeError(f"observer must provide debug, info and warning; got {type(observer).__name__}")
    return observer
