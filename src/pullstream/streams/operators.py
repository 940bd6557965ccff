"""
Stream operators for transformation.

Every operator is a stage: a Source wrapping its upstream Source, holding
only the state it needs, and pulling from upstream one element at a time.
"""

from abc import abstractmethod
from typing import Any, Callable, Optional, TypeVar

from pullstream.sources.base import Source

T = TypeVar('T')
U = TypeVar('U')


class StreamOperator(Source[T]):
    """Base class for stream operators."""

    def __init__(self, upstream: Source):
        self.upstream = upstream

    def __repr__(self):
        return "{}({!r})".format(self.__class__.__name__, self.upstream)


class ComputedOperator(StreamOperator[U]):
    """
    Compute the current element on the first ``get()`` after ``next()``.

    The value is cached until the next ``next()`` so ``get()`` stays
    idempotent, and ``count()`` never pays for the computation.
    """

    _UNSET = object()

    def __init__(self, upstream: Source):
        super().__init__(upstream)
        self._current: Any = self._UNSET
        self._active = False

    @abstractmethod
    def _compute(self, element: Any) -> U:
        """Turn the current upstream element into this stage's element."""
        pass

    def _advance(self) -> bool:
        return self.upstream.next()

    def next(self) -> bool:
        self._current = self._UNSET
        self._active = self._advance()
        return self._active

    def get(self) -> Optional[U]:
        if not self._active:
            return None
        if self._current is self._UNSET:
            self._current = self._compute(self.upstream.get())
        return self._current


class FilterOperator(StreamOperator[T]):
    """Filter elements by predicate."""

    def __init__(self, upstream: Source, predicate: Callable[[T], bool]):
        super().__init__(upstream)
        self.predicate = predicate

    def next(self) -> bool:
        while self.upstream.next():
            if self.predicate(self.upstream.get()):
                return True
        return False

    def get(self) -> Optional[T]:
        return self.upstream.get()


class MapOperator(ComputedOperator[U]):
    """Map each element to a new value."""

    def __init__(self, upstream: Source, func: Callable[[T], U]):
        super().__init__(upstream)
        self.func = func

    def _compute(self, element: T) -> U:
        return self.func(element)


class MapIndexedOperator(ComputedOperator[U]):
    """Map each element together with its 0-based position in this stage."""

    def __init__(self, upstream: Source, func: Callable[[int, T], U]):
        super().__init__(upstream)
        self.func = func
        self._index = -1

    def _advance(self) -> bool:
        if self.upstream.next():
            self._index += 1
            return True
        return False

    def _compute(self, element: T) -> U:
        return self.func(self._index, element)


class TakeOperator(StreamOperator[T]):
    """Take first n elements."""

    def __init__(self, upstream: Source, n: int):
        super().__init__(upstream)
        self.n = n
        self._taken = 0
        self._active = False

    def next(self) -> bool:
        if self._taken >= self.n:
            self._active = False
            return False
        self._active = self.upstream.next()
        if self._active:
            self._taken += 1
        else:
            # Upstream is done, do not pull it again
            self._taken = self.n
        return self._active

    def get(self) -> Optional[T]:
        return self.upstream.get() if self._active else None


class SkipOperator(StreamOperator[T]):
    """Skip first n elements."""

    def __init__(self, upstream: Source, n: int):
        super().__init__(upstream)
        self.n = n
        self._skipped = 0
        self._exhausted = False

    def next(self) -> bool:
        if self._exhausted:
            return False
        while self._skipped < self.n:
            if not self.upstream.next():
                self._exhausted = True
                return False
            self._skipped += 1
        if not self.upstream.next():
            self._exhausted = True
            return False
        return True

    def get(self) -> Optional[T]:
        return None if self._exhausted else self.upstream.get()


class OnEachOperator(StreamOperator[T]):
    """Call ``visit`` once per element as it is advanced to."""

    def __init__(self, upstream: Source, visit: Callable[[T], Any]):
        super().__init__(upstream)
        self.visit = visit

    def next(self) -> bool:
        if self.upstream.next():
            self.visit(self.upstream.get())
            return True
        return False

    def get(self) -> Optional[T]:
        return self.upstream.get()
