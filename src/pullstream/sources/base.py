"""
Pull-cursor sources that feed a pipeline.
"""

import queue
from abc import ABC, abstractmethod
from typing import Any, Generic, Iterator, Optional, Sequence, TypeVar

from pullstream.exceptions import StreamTypeError

T = TypeVar('T')


class Source(ABC, Generic[T]):
    """
    The minimal pull contract every producer of elements implements.

    ``next()`` advances the cursor and reports whether an element is
    available. ``get()`` returns that element and keeps returning it until
    the next call to ``next()``. A source is single-pass: once ``next()``
    returned ``False`` it keeps returning ``False``, and ``get()`` returns
    ``None`` instead of raising so over-driven pipelines stay safe.
    """

    @abstractmethod
    def next(self) -> bool:
        """Advance to the next element."""
        pass

    @abstractmethod
    def get(self) -> Optional[T]:
        """Return the current element."""
        pass

    @classmethod
    def coerce(cls, obj: Any) -> 'Source':
        """Turn a source-like object into a Source."""
        # Imported here, channel imports this module
        from pullstream.sources.channel import Channel, ChannelSource

        if isinstance(obj, Source):
            return obj
        elif isinstance(obj, Channel):
            return ChannelSource(obj)
        elif isinstance(obj, queue.Queue):
            return ChannelSource(Channel.from_queue(obj))
        elif isinstance(obj, (list, tuple)):
            return SequenceSource(obj)
        elif callable(getattr(obj, 'next', None)) and callable(getattr(obj, 'get', None)):
            return AdapterSource(obj)
        else:
            try:
                return IteratorSource(iter(obj))
            except TypeError:
                raise StreamTypeError("Not a source {!r}".format(obj), value=obj) from None


class EmptySource(Source[T]):
    """A source with no elements."""

    def next(self) -> bool:
        return False

    def get(self) -> Optional[T]:
        return None


class SequenceSource(Source[T]):
    """Walk an in-memory sequence by index."""

    def __init__(self, items: Sequence[T]):
        self._items = items
        self._idx = -1

    def next(self) -> bool:
        if self._idx + 1 >= len(self._items):
            self._idx = len(self._items)
            return False
        self._idx += 1
        return True

    def get(self) -> Optional[T]:
        if 0 <= self._idx < len(self._items):
            return self._items[self._idx]
        return None


class IteratorSource(Source[T]):
    """Adapt a Python iterator to the pull contract."""

    def __init__(self, iterator: Iterator[T]):
        self._iterator = iterator
        self._current: Optional[T] = None
        self._exhausted = False

    def next(self) -> bool:
        if self._exhausted:
            return False
        try:
            self._current = next(self._iterator)
        except StopIteration:
            self._exhausted = True
            self._current = None
            return False
        return True

    def get(self) -> Optional[T]:
        return self._current


class AdapterSource(Source[T]):
    """Wrap a user object that has ``next``/``get`` but does not subclass Source."""

    def __init__(self, adaptee: Any):
        self._adaptee = adaptee
        self._exhausted = False

    def next(self) -> bool:
        if self._exhausted:
            return False
        if not self._adaptee.next():
            self._exhausted = True
            return False
        return True

    def get(self) -> Optional[T]:
        if self._exhausted:
            return None
        return self._adaptee.get()
