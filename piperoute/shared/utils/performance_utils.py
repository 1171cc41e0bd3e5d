"""Timing and memory instrumentation helpers."""
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

import psutil

logger = logging.getLogger(__name__)


@dataclass
class TimingResult:
    """Measurements captured by :func:`timing_context`."""
    label: str
    elapsed_seconds: float = 0.0
    rss_delta_bytes: int = 0


def _current_rss() -> int:
    return psutil.Process().memory_info().rss


@contextmanager
def timing_context(label: str, log: Optional[logging.Logger] = None) -> Iterator[TimingResult]:
    """Measure wall time and resident memory growth of a block.
    
    Args:
        label: Name reported in the log line
        log: Logger to report to (defaults to this module's logger)
        
    Yields:
        TimingResult filled in when the block exits
    """
    target = log or logger
    result = TimingResult(label=label)
    rss_before = _current_rss()
    start = time.perf_counter()
    try:
        yield result
    finally:
        result.elapsed_seconds = time.perf_counter() - start
        result.rss_delta_bytes = _current_rss() - rss_before
        target.debug(
            f"{label}: {result.elapsed_seconds * 1000:.1f} ms, "
            f"RSS delta {result.rss_delta_bytes / (1024 * 1024):+.2f} MB"
        )
