"""
pullstream: lazy, pull-based sequence pipelines.

A Stream wraps a Source (anything with ``next``/``get``) in a chain of
lazily evaluated operators and is drained by a terminal operation.
"""

from pullstream.config import StreamConfig
from pullstream.exceptions import StreamError, StreamTypeError
from pullstream.sources import Source, Channel, CLOSED
from pullstream.streams import (
    Stream,
    FindResult,
    collect_as,
    for_each_as,
    for_each_indexed_as,
    reduce_as,
    find_or_as,
)
from pullstream.memory import LoggingHandler, MemoryMonitor, MemoryPressureLevel, monitor

__version__ = "0.1.0"
__license__ = "Apache-2.0"

__all__ = [
    "StreamConfig",
    "StreamError",
    "StreamTypeError",
    "Source",
    "Channel",
    "CLOSED",
    "Stream",
    "FindResult",
    "collect_as",
    "for_each_as",
    "for_each_indexed_as",
    "reduce_as",
    "find_or_as",
    "MemoryMonitor",
    "MemoryPressureLevel",
    "monitor",
]

# Report memory pressure hit while collecting large pipelines
monitor.add_handler(LoggingHandler())
