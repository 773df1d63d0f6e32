"""Service timing — the ``@traced`` decorator.

Near-zero overhead when disabled (one ContextVar lookup per call).
When enabled via ``--verbose``, each traced service call is timed, logged
through structlog, and its duration is merged into ``ServiceResult.meta``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from contextvars import ContextVar
from typing import ParamSpec, TypeVar

import structlog

from orderctl.services.result import ServiceResult

_enabled: ContextVar[bool] = ContextVar("_telemetry_enabled", default=False)

_P = ParamSpec("_P")
_R = TypeVar("_R")


def enable_telemetry() -> None:
    """Turn on timing (called by AppContext when ``--verbose`` is set)."""
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)


def telemetry_enabled() -> bool:
    return _enabled.get()


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Time a service method and record ``duration_ms`` in the result meta."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        log = structlog.get_logger("orderctl.telemetry")
        started = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception:
            log.debug(
                "service.failed",
                op=func.__qualname__,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            raise

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        ok = True
        if isinstance(result, ServiceResult):
            ok = result.ok
            meta = {**(result.meta or {}), "duration_ms": duration_ms}
            result = result.model_copy(update={"meta": meta})  # type: ignore[assignment]
        log.debug("service.complete", op=func.__qualname__, duration_ms=duration_ms, ok=ok)
        return result

    return wrapper
