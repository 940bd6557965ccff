"""
Operators that carry state from one element to the next.
"""

from enum import Enum
from typing import Any, Callable, Optional, TypeVar

from pullstream.sources.base import EmptySource, Source
from pullstream.streams.operators import StreamOperator, ComputedOperator

T = TypeVar('T')
U = TypeVar('U')
R = TypeVar('R')


class FlatMapState(Enum):
    """States of the flat-map stage."""
    NO_INNER_SOURCE = "no_inner_source"
    DRAINING_INNER = "draining_inner"


class FlatMapConcatOperator(StreamOperator[U]):
    """
    Replace each element with the elements of the source ``func`` maps it to.

    Each inner source is drained completely before the next outer element
    is pulled. ``func`` may return a Source, a Stream, a list or any
    iterable; ``None`` and empty inner sources are skipped over.
    """

    def __init__(self, upstream: Source, func: Callable[[T], Any]):
        super().__init__(upstream)
        self.func = func
        self.state = FlatMapState.NO_INNER_SOURCE
        self._inner: Source = EmptySource()

    def _open_inner(self, element: T) -> Source:
        inner = self.func(element)
        if inner is None:
            return EmptySource()
        return Source.coerce(inner)

    def next(self) -> bool:
        while True:
            if self.state is FlatMapState.DRAINING_INNER:
                if self._inner.next():
                    return True
                self._inner = EmptySource()
                self.state = FlatMapState.NO_INNER_SOURCE

            if not self.upstream.next():
                return False
            self._inner = self._open_inner(self.upstream.get())
            self.state = FlatMapState.DRAINING_INNER

    def get(self) -> Optional[U]:
        if self.state is FlatMapState.DRAINING_INNER:
            return self._inner.get()
        return None


class DistinctOperator(StreamOperator[T]):
    """
    Drop an element when it equals the previously emitted one.

    Deduplication is by adjacency only: ``[a, a, b, a]`` gives
    ``[a, b, a]``. ``cmp(old, new)`` returns True when the two are equal.
    The previous-element slot starts out holding the sentinel ``None``, so
    the first call to ``cmp`` receives ``None`` as ``old``, which is not a
    real element. Its result is ignored and the first element is always
    emitted.
    """

    def __init__(self, upstream: Source, cmp: Optional[Callable[[T, T], bool]] = None):
        super().__init__(upstream)
        self.cmp = cmp or (lambda old, new: old == new)
        self._previous: Optional[T] = None
        self._has_previous = False
        self._active = False

    def next(self) -> bool:
        while self.upstream.next():
            element = self.upstream.get()
            same = self.cmp(self._previous, element)
            if same and self._has_previous:
                continue
            self._previous = element
            self._has_previous = True
            self._active = True
            return True
        self._active = False
        return False

    def get(self) -> Optional[T]:
        return self._previous if self._active else None


class ZipWithOperator(ComputedOperator[R]):
    """Combine elements of two sources pairwise; the shorter one wins."""

    def __init__(self, upstream: Source, other: Source, func: Callable[[T, U], R]):
        super().__init__(upstream)
        self.other = other
        self.func = func
        self._exhausted = False

    def _advance(self) -> bool:
        if self._exhausted:
            return False
        if not self.upstream.next() or not self.other.next():
            self._exhausted = True
            return False
        return True

    def _compute(self, element: T) -> R:
        return self.func(element, self.other.get())

    def __repr__(self):
        return "{}({!r}, {!r})".format(self.__class__.__name__, self.upstream, self.other)


class ZipWithPrevOperator(ComputedOperator[R]):
    """
    Combine every element with the one before it.

    The first element is paired with ``initial`` (``None`` unless given),
    which stands in for the missing predecessor.
    """

    def __init__(self, upstream: Source, func: Callable[[Optional[T], T], R], initial: Optional[T] = None):
        super().__init__(upstream)
        self.func = func
        self._previous = initial
        self._pair_previous = initial

    def _advance(self) -> bool:
        if not self.upstream.next():
            return False
        self._pair_previous = self._previous
        self._previous = self.upstream.get()
        return True

    def _compute(self, element: T) -> R:
        return self.func(self._pair_previous, element)


class ScanOperator(StreamOperator[R]):
    """Emit the running accumulation, one output per input, never the seed."""

    def __init__(self, upstream: Source, init: R, accumf: Callable[[R, T], R]):
        super().__init__(upstream)
        self.accumf = accumf
        self._acc = init
        self._active = False

    def next(self) -> bool:
        self._active = self.upstream.next()
        if self._active:
            self._acc = self.accumf(self._acc, self.upstream.get())
        return self._active

    def get(self) -> Optional[R]:
        return self._acc if self._active else None
