from __future__ import annotations

from contextlib import contextmanager
import contextvars
from dataclasses import dataclass, field
import functools
import logging
import time
from typing import Callable, Dict, Generator, Iterator, Optional, TypeVar

DEFAULT_LOGGER_NAME = "uvicorn.error"
logger = logging.getLogger(DEFAULT_LOGGER_NAME)

T = TypeVar("T")

_CURRENT_TIMING: contextvars.ContextVar["PageTiming | None"] = contextvars.ContextVar(
    "page_timing", default=None
)


@dataclass
class PageTiming:
    """Airtable time spent inside one Gradio callback, keyed by request action."""

    page: str
    callback: str
    start: float
    http_by_action: Dict[str, float] = field(default_factory=dict)
    http_calls: int = 0

    @property
    def http_seconds(self) -> float:
        return sum(self.http_by_action.values())

    def add_http(self, seconds: float, action: str = "") -> None:
        key = action or "request"
        self.http_by_action[key] = self.http_by_action.get(key, 0.0) + seconds
        self.http_calls += 1

    def slowest_action(self) -> str:
        if not self.http_by_action:
            return "-"
        return max(self.http_by_action.items(), key=lambda item: item[1])[0]


def has_active_timing() -> bool:
    return _CURRENT_TIMING.get() is not None


def record_http_time(seconds: float, action: str = "") -> None:
    timing = _CURRENT_TIMING.get()
    if timing is not None:
        timing.add_http(seconds, action)


@contextmanager
def http_call_timer(action: str) -> Iterator[None]:
    """Charge the enclosed HTTP round trip to the active page callback, if any."""
    start = time.perf_counter()
    try:
        yield
    finally:
        record_http_time(time.perf_counter() - start, action)


def log_timing(area: str, event_name: str, start: float, **fields: object) -> None:
    elapsed_ms = (time.perf_counter() - start) * 1000.0
    if fields:
        field_text = " ".join(f"{key}={value}" for key, value in fields.items())
        logger.info("%s.timing event=%s ms=%.2f %s", area, event_name, elapsed_ms, field_text)
        return
    logger.info("%s.timing event=%s ms=%.2f", area, event_name, elapsed_ms)


@contextmanager
def page_load_timing(
    page: str, callback: str, log: Optional[logging.Logger] = None
) -> Generator[PageTiming, None, None]:
    timing = PageTiming(page=page, callback=callback, start=time.perf_counter())
    token = _CURRENT_TIMING.set(timing)
    try:
        yield timing
    finally:
        _CURRENT_TIMING.reset(token)
        total = time.perf_counter() - timing.start
        http_seconds = timing.http_seconds
        (log or logger).info(
            "page_load.timing page=%s callback=%s total_ms=%.2f http_ms=%.2f http_calls=%d "
            "non_http_ms=%.2f slowest=%s",
            page,
            callback,
            total * 1000,
            http_seconds * 1000,
            timing.http_calls,
            max(total - http_seconds, 0.0) * 1000,
            timing.slowest_action(),
        )


def timed_page_load(
    page: str,
    func: Callable[..., T],
    label: Optional[str] = None,
    log: Optional[logging.Logger] = None,
) -> Callable[..., T]:
    callback = label or getattr(func, "__name__", type(func).__name__)

    @functools.wraps(func)
    def _wrapped(*args, **kwargs) -> T:
        with page_load_timing(page, callback, log):
            return func(*args, **kwargs)

    return _wrapped
