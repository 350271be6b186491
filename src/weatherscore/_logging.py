"""Call logging for the source and service layers."""

from __future__ import annotations

import functools
import inspect
import logging
import os
import threading
import time
from typing import Any, Callable, TypeVar

from weatherscore.config import settings

F = TypeVar("F", bound=Callable[..., Any])

_LOG_DIR = settings.log_dir
_LOG_FILE = os.path.join(_LOG_DIR, "engine.log")

_logger: logging.Logger | None = None
_logger_lock = threading.Lock()


def get_logger() -> logging.Logger:
    """Return the file logger, creating log dir and handler on first use."""
    global _logger
    if _logger is not None:
        return _logger

    with _logger_lock:
        if _logger is not None:
            return _logger

        os.makedirs(_LOG_DIR, exist_ok=True)

        _logger = logging.getLogger("weatherscore.engine")
        _logger.setLevel(logging.DEBUG)
        _logger.propagate = False

        log_file = os.path.abspath(_LOG_FILE)
        # Other handlers (test capture, for one) may already be attached
        if not any(getattr(h, "baseFilename", None) == log_file for h in _logger.handlers):
            handler = logging.FileHandler(log_file, encoding="utf-8")
            handler.setFormatter(
                logging.Formatter("%(asctime)s | %(levelname)s | %(message)s"),
            )
            _logger.addHandler(handler)

    return _logger


def _short_repr(value: Any) -> str:
    # Candidate lists can hold hundreds of locations
    if isinstance(value, (list, tuple, set, dict)):
        return f"<{len(value)} items>"
    return repr(value)


def _arg_summary(args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    # Skip 'self'
    arg_parts = [_short_repr(a) for a in args[1:]]
    arg_parts += [f"{k}={_short_repr(v)}" for k, v in kwargs.items()]
    return ", ".join(arg_parts)


def _count(result: Any) -> int:
    if isinstance(result, (list, dict)):
        return len(result)
    return 1


def log_source_call(fn: F) -> F:
    """Decorator that logs weather source fetches (coroutine functions only)."""
    if not inspect.iscoroutinefunction(fn):
        raise TypeError(f"{fn.__qualname__} must be a coroutine function")

    @functools.wraps(fn)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        arg_str = _arg_summary(args, kwargs)
        get_logger().info("CALL: %s(%s)", fn.__qualname__, arg_str)
        start = time.monotonic()
        try:
            result = await fn(*args, **kwargs)
        except Exception as exc:
            get_logger().error(
                "FAIL: %s(%s) -> %s: %s (%.3fs)",
                fn.__qualname__, arg_str, type(exc).__name__, exc, time.monotonic() - start,
            )
            raise
        get_logger().info(
            "OK: %s(%s) -> %d items (%.3fs)",
            fn.__qualname__, arg_str, _count(result), time.monotonic() - start,
        )
        return result

    return wrapper  # type: ignore[return-value]


def log_service_call(fn: F) -> F:
    """Decorator that logs service-layer calls (coroutine functions only)."""
    if not inspect.iscoroutinefunction(fn):
        raise TypeError(f"{fn.__qualname__} must be a coroutine function")

    @functools.wraps(fn)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        get_logger().info("SERVICE CALL: %s(%s)", fn.__qualname__, _arg_summary(args, kwargs))
        start = time.monotonic()
        try:
            result = await fn(*args, **kwargs)
        except Exception as exc:
            get_logger().error(
                "SERVICE FAIL: %s -> %s: %s (%.3fs)",
                fn.__qualname__, type(exc).__name__, exc, time.monotonic() - start,
            )
            raise
        get_logger().info("SERVICE OK: %s -> %.3fs", fn.__qualname__, time.monotonic() - start)
        return result

    return wrapper  # type: ignore[return-value]
