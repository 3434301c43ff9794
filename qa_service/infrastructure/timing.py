"""Timing utilities for data access and handler operations.

``timed_operation`` wraps a block (typically one store round-trip) and
``log_execution`` wraps a whole handler call.
"""
from __future__ import annotations

import inspect
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, ParamSpec, TypeVar

import structlog

P = ParamSpec("P")
T = TypeVar("T")

log = structlog.stdlib.get_logger()


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


@contextmanager
def timed_operation(operation: str, **context: Any):
    """Context manager that measures and logs operation duration.

    Args:
        operation: Name of the operation being timed (e.g., "db.get_answers")
        **context: Additional context to include in the log entry

    Yields:
        dict: A mutable dict where 'elapsed_ms' will be set after the block completes.

    Example:
        with timed_operation("db.delete_answer", answer_uuid=answer_uuid) as timing:
            await session.execute(stmt)
        # timing["elapsed_ms"] contains the duration
    """
    timing: dict[str, Any] = {}
    start = time.perf_counter()
    try:
        yield timing
    except Exception as e:
        timing["elapsed_ms"] = _elapsed_ms(start)
        log.debug(
            f"{operation}.failed",
            elapsed_ms=timing["elapsed_ms"],
            error_type=type(e).__name__,
            **context,
        )
        raise
    timing["elapsed_ms"] = _elapsed_ms(start)
    log.debug(f"{operation}.completed", elapsed_ms=timing["elapsed_ms"], **context)


def log_execution(
    operation: str,
    extract_context: Callable[..., dict[str, Any]] | None = None,
    expected: tuple[type[BaseException], ...] = (),
):
    """Decorator that logs start, completion and failure of a call.

    Args:
        operation: Name of the operation (e.g., "handler.create_answer")
        extract_context: Optional callable receiving the call's (*args, **kwargs)
                         and returning a dict of log context.
        expected: Exception types that are a normal outcome (e.g. rejected input).
                  They are logged as ``<operation>.rejected`` at warning level
                  instead of ``<operation>.failed`` at error level.
    """

    def _log_failure(e: Exception, start: float, context: dict[str, Any]) -> None:
        if isinstance(e, expected):
            log.warning(
                f"{operation}.rejected",
                elapsed_ms=_elapsed_ms(start),
                reason=str(e),
                **context,
            )
        else:
            log.error(
                f"{operation}.failed",
                elapsed_ms=_elapsed_ms(start),
                error=str(e),
                error_type=type(e).__name__,
                **context,
            )

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @wraps(func)
        async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            context = extract_context(*args, **kwargs) if extract_context else {}
            log.info(f"{operation}.started", **context)
            start = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                _log_failure(e, start, context)
                raise
            log.info(f"{operation}.completed", elapsed_ms=_elapsed_ms(start), **context)
            return result

        @wraps(func)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            context = extract_context(*args, **kwargs) if extract_context else {}
            log.info(f"{operation}.started", **context)
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _log_failure(e, start, context)
                raise
            log.info(f"{operation}.completed", elapsed_ms=_elapsed_ms(start), **context)
            return result

        if inspect.iscoroutinefunction(func):
            return async_wrapper  # type: ignore[return-value]
        return sync_wrapper  # type: ignore[return-value]

    return decorator
