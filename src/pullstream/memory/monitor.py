"""
Memory pressure seen by collectors while they materialize a pipeline.

A collector appends every element it pulls to one list, so a long pipeline
grows this process without bound. Every ``memory_check_interval`` elements
the collector asks the monitor how much of the configured memory limit the
process now holds, and the monitor hands that reading to its handlers.
"""

import logging
import psutil
from enum import IntEnum
from typing import List, Optional
from dataclasses import dataclass
from abc import ABC, abstractmethod

from pullstream.config import config

logger = logging.getLogger(__name__)


class MemoryPressureLevel(IntEnum):
    """How close the process is to its memory limit."""
    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    @classmethod
    def for_usage(cls, percent: float) -> 'MemoryPressureLevel':
        """Level for a process holding ``percent`` of its memory limit."""
        for threshold, level in _THRESHOLDS:
            if percent >= threshold:
                return level
        return cls.NONE


# Percent of the memory limit at which each level starts, highest first
_THRESHOLDS = (
    (95, MemoryPressureLevel.CRITICAL),
    (85, MemoryPressureLevel.HIGH),
    (70, MemoryPressureLevel.MEDIUM),
    (50, MemoryPressureLevel.LOW),
)


@dataclass
class MemoryInfo:
    """Resident memory of the process after a collector took ``collected`` elements."""
    collected: int
    rss: int
    limit: int
    pressure_level: MemoryPressureLevel

    @property
    def percent(self) -> float:
        return (self.rss / self.limit) * 100 if self.limit else 100.0

    @property
    def available(self) -> int:
        return max(0, self.limit - self.rss)

    def __str__(self) -> str:
        return (f"{self.collected} elements collected, process holds "
                f"{config.format_bytes(self.rss)} of {config.format_bytes(self.limit)} "
                f"({self.percent:.1f}%), pressure {self.pressure_level.name}")


class MemoryPressureHandler(ABC):
    """Abstract base class for memory pressure handlers."""

    @abstractmethod
    def can_handle(self, level: MemoryPressureLevel, info: MemoryInfo) -> bool:
        """Check if this handler should handle the given pressure level."""
        pass

    @abstractmethod
    def handle(self, level: MemoryPressureLevel, info: MemoryInfo) -> None:
        """Handle memory pressure."""
        pass


class MemoryMonitor:
    """Compare the process's resident memory against the memory limit."""

    def __init__(self, memory_limit: Optional[int] = None):
        """
        Initialize memory monitor.

        Args:
            memory_limit: Memory limit in bytes (None for ``config.memory_limit``)
        """
        self._memory_limit = memory_limit
        self.handlers: List[MemoryPressureHandler] = []
        self._last_level = MemoryPressureLevel.NONE

    @property
    def memory_limit(self) -> int:
        return self._memory_limit or config.memory_limit

    @property
    def last_level(self) -> MemoryPressureLevel:
        return self._last_level

    def add_handler(self, handler: MemoryPressureHandler) -> None:
        self.handlers.append(handler)

    def remove_handler(self, handler: MemoryPressureHandler) -> None:
        if handler in self.handlers:
            self.handlers.remove(handler)

    def get_memory_info(self, collected: int = 0) -> MemoryInfo:
        """Read this process's resident memory."""
        rss = psutil.Process().memory_info().rss
        limit = self.memory_limit
        percent = (rss / limit) * 100 if limit else 100.0
        return MemoryInfo(
            collected=collected,
            rss=rss,
            limit=limit,
            pressure_level=MemoryPressureLevel.for_usage(percent),
        )

    def check_memory_pressure(self, collected: int = 0) -> MemoryPressureLevel:
        """Read memory after ``collected`` elements and notify handlers."""
        info = self.get_memory_info(collected)
        level = info.pressure_level

        if level != self._last_level:
            logger.debug("Memory pressure %s -> %s after %d elements",
                         self._last_level.name, level.name, collected)

        for handler in self.handlers:
            if handler.can_handle(level, info):
                try:
                    handler.handle(level, info)
                except Exception:
                    logger.exception("Memory pressure handler %r failed", handler)

        self._last_level = level
        return level


# Global monitor instance
monitor = MemoryMonitor()
