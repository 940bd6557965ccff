"""Pull-cursor sources."""

from pullstream.sources.base import (
    Source,
    EmptySource,
    SequenceSource,
    IteratorSource,
    AdapterSource,
)
from pullstream.sources.channel import (
    Channel,
    ChannelSource,
    CLOSED,
)

__all__ = [
    "Source",
    "EmptySource",
    "SequenceSource",
    "IteratorSource",
    "AdapterSource",
    "Channel",
    "ChannelSource",
    "CLOSED",
]
