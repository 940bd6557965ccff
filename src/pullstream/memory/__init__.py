"""Memory monitoring for collectors that materialize a pipeline."""

from pullstream.memory.monitor import (
    MemoryMonitor,
    MemoryPressureLevel,
    MemoryInfo,
    MemoryPressureHandler,
    monitor,
)
from pullstream.memory.handlers import LoggingHandler

__all__ = [
    "MemoryMonitor",
    "MemoryPressureLevel",
    "MemoryInfo",
    "MemoryPressureHandler",
    "LoggingHandler",
    "monitor",
]
