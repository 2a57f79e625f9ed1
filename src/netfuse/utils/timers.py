"""Timing utilities"""
import logging
import time
from typing import Any, Optional

logger = logging.getLogger(__name__)


class Timer:
    """Context manager that logs the elapsed time of a pipeline stage"""

    def __init__(self, name: str = "Operation", log: Optional[logging.Logger] = None):
        self.name = name
        self.log = log or logger
        self.start_time: float = 0
        self.elapsed: float = 0

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args: Any) -> None:
        self.elapsed = time.perf_counter() - self.start_time
        self.log.info(f"{self.name} completed in {self.elapsed:.2f}s")
