"""
Lazy pull-based streams.
"""

import logging
import queue
from typing import (
    Any, Callable, Iterable, Iterator, List, NamedTuple, Optional,
    Sequence, TypeVar, Union
)

from pullstream.config import config
from pullstream.memory import monitor
from pullstream.sources.base import (
    EmptySource, IteratorSource, SequenceSource, Source
)
from pullstream.sources.channel import Channel, ChannelSource, CLOSED
from pullstream.streams.operators import (
    FilterOperator, MapOperator, MapIndexedOperator, TakeOperator,
    SkipOperator, OnEachOperator
)
from pullstream.streams.stateful import (
    FlatMapConcatOperator, DistinctOperator, ZipWithOperator,
    ZipWithPrevOperator, ScanOperator
)

T = TypeVar('T')
U = TypeVar('U')
R = TypeVar('R')

logger = logging.getLogger(__name__)


class FindResult(NamedTuple):
    """Outcome of ``Stream.find``; ``found`` tells a miss from a falsy match."""
    value: Any
    found: bool


NOT_FOUND = FindResult(None, False)


def check_memory(collected: int) -> None:
    """Let the memory monitor look at the process every N collected elements."""
    if config.enable_memory_checks and collected % config.memory_check_interval == 0:
        monitor.check_memory_pressure(collected)


def short_circuits(stream: 'Stream', operation: str) -> bool:
    """True (and logged) when ``operation`` must return its default at once."""
    if stream.is_absent:
        logger.debug("%s on absent stream", operation)
        return True
    return False


class Stream(Source[T], Iterable[T]):
    """
    A lazy stream of elements pulled from a Source.

    Intermediate operations wrap the current stage in a new one and return
    a new Stream; nothing is read until a terminal operation (``collect``,
    ``for_each``, ``reduce``...) starts calling ``next``/``get``. A stream is
    single-pass and must be drained by exactly one consumer.

    ``Stream.absent()`` is the explicit "no stream" value: every
    intermediate operation returns it unchanged and every terminal
    operation returns its natural default.
    """

    def __init__(self, source: Optional[Source[T]]):
        self._stage = source

    @property
    def is_absent(self) -> bool:
        return self._stage is None

    def __repr__(self):
        if self.is_absent:
            return "Stream.absent()"
        return "Stream({!r})".format(self._stage)

    # Source contract

    def next(self) -> bool:
        if self._stage is None:
            return False
        return self._stage.next()

    def get(self) -> Optional[T]:
        if self._stage is None:
            return None
        return self._stage.get()

    def __iter__(self) -> Iterator[T]:
        while self.next():
            yield self.get()

    def _chain(self, build: Callable[[Source], Source]) -> 'Stream':
        if self.is_absent:
            return self
        return Stream(build(self._stage))

    # Factory methods

    @classmethod
    def absent(cls) -> 'Stream[Any]':
        """The absent stream."""
        return cls(None)

    @classmethod
    def from_slice(cls, items: Optional[Sequence[T]]) -> 'Stream[T]':
        """Create stream over an in-memory sequence."""
        if items is None:
            return cls(EmptySource())
        return cls(SequenceSource(items))

    @classmethod
    def of(cls, *items: T) -> 'Stream[T]':
        """Create stream from the given arguments."""
        return cls(SequenceSource(items))

    @classmethod
    def from_chan(cls, channel: Union[Channel, queue.Queue, None],
                  sentinel: Any = CLOSED) -> 'Stream[T]':
        """
        Create stream reading from a channel fed by another thread.

        A plain ``queue.Queue`` is accepted too; the producer ends the data
        by putting ``sentinel`` on it.
        """
        if isinstance(channel, queue.Queue):
            channel = Channel.from_queue(channel, sentinel)
        return cls(ChannelSource(channel))

    @classmethod
    def from_source(cls, source: Any) -> 'Stream[T]':
        """Create stream from any source-like object; ``None`` is absent."""
        if source is None:
            return cls.absent()
        return cls(Source.coerce(source))

    @classmethod
    def from_iterable(cls, iterable: Iterable[T]) -> 'Stream[T]':
        """Create stream from iterable."""
        return cls(IteratorSource(iter(iterable)))

    @classmethod
    def range(cls, *args) -> 'Stream[int]':
        """Create stream of integers."""
        return cls(IteratorSource(iter(range(*args))))

    # Intermediate operations

    def filter(self, predicate: Callable[[T], bool]) -> 'Stream[T]':
        """Keep only elements matching predicate."""
        return self._chain(lambda up: FilterOperator(up, predicate))

    def map(self, func: Callable[[T], U]) -> 'Stream[U]':
        """Apply function to each element."""
        return self._chain(lambda up: MapOperator(up, func))

    def map_indexed(self, func: Callable[[int, T], U]) -> 'Stream[U]':
        """Apply ``func(index, element)`` to each element."""
        return self._chain(lambda up: MapIndexedOperator(up, func))

    def flat_map_concat(self, func: Callable[[T], Any]) -> 'Stream[U]':
        """Replace each element with the contents of the source it maps to."""
        return self._chain(lambda up: FlatMapConcatOperator(up, func))

    def take(self, n: int) -> 'Stream[T]':
        """Take first n elements."""
        return self._chain(lambda up: TakeOperator(up, n))

    def skip(self, n: int) -> 'Stream[T]':
        """Skip first n elements."""
        return self._chain(lambda up: SkipOperator(up, n))

    def on_each(self, visit: Callable[[T], Any]) -> 'Stream[T]':
        """Call ``visit`` for every element passing through."""
        return self._chain(lambda up: OnEachOperator(up, visit))

    def distinct(self) -> 'Stream[T]':
        """Drop elements equal to the element emitted just before them."""
        return self._chain(lambda up: DistinctOperator(up))

    def distinct_by(self, cmp: Callable[[T, T], bool]) -> 'Stream[T]':
        """
        Like ``distinct`` with ``cmp(old, new)`` deciding equality.

        The first call gets ``old=None``, a placeholder rather than a real
        element; the first element is emitted whatever ``cmp`` returns.
        """
        return self._chain(lambda up: DistinctOperator(up, cmp))

    def zip_with(self, other: Any, func: Callable[[T, U], R]) -> 'Stream[R]':
        """Combine pairwise with ``other``; stops at the shorter side."""
        if other is None or (isinstance(other, Stream) and other.is_absent):
            return Stream.absent()
        return self._chain(lambda up: ZipWithOperator(up, Source.coerce(other), func))

    def zip_with_prev(self, func: Callable[[Optional[T], T], R],
                      initial: Optional[T] = None) -> 'Stream[R]':
        """Apply ``func(previous, element)``; the first previous is ``initial``."""
        return self._chain(lambda up: ZipWithPrevOperator(up, func, initial))

    def scan(self, init: R, accumf: Callable[[R, T], R]) -> 'Stream[R]':
        """Emit each running value of ``accumf``, starting from ``init``."""
        return self._chain(lambda up: ScanOperator(up, init, accumf))

    # Terminal operations

    def collect(self) -> List[T]:
        """Collect all elements into a list."""
        return self.collect_to([])

    def collect_to(self, target: List[T]) -> List[T]:
        """Append all elements to ``target`` and return it."""
        if short_circuits(self, "collect"):
            return target
        collected = 0
        while self.next():
            target.append(self.get())
            collected += 1
            check_memory(collected)
        logger.debug("Collected %d elements", collected)
        return target

    def for_each(self, visit: Callable[[T], Any]) -> None:
        """Apply function to each element."""
        if short_circuits(self, "for_each"):
            return
        while self.next():
            visit(self.get())

    def for_each_indexed(self, visit: Callable[[int, T], Any]) -> None:
        """Apply ``visit(index, element)`` to each element."""
        if short_circuits(self, "for_each_indexed"):
            return
        index = 0
        while self.next():
            visit(index, self.get())
            index += 1

    def reduce(self, func: Callable[[T, T], T]) -> Optional[T]:
        """
        Reduce stream to single value, seeded with the first element.

        An empty stream gives ``None``, which a caller cannot tell apart from
        a single ``None`` element; use ``fold`` when that matters.
        """
        if short_circuits(self, "reduce"):
            return None
        if not self.next():
            return None
        result = self.get()
        while self.next():
            result = func(result, self.get())
        return result

    def fold(self, init: R, func: Callable[[R, T], R]) -> R:
        """Reduce stream to single value, starting from ``init``."""
        if short_circuits(self, "fold"):
            return init
        result = init
        while self.next():
            result = func(result, self.get())
        return result

    def find(self, predicate: Callable[[T], bool]) -> FindResult:
        """First element matching predicate, as ``FindResult(value, found)``."""
        if short_circuits(self, "find"):
            return NOT_FOUND
        while self.next():
            element = self.get()
            if predicate(element):
                return FindResult(element, True)
        return NOT_FOUND

    def find_or(self, predicate: Callable[[T], bool], default: T) -> T:
        result = self.find(predicate)
        return result.value if result.found else default

    def find_last(self, predicate: Callable[[T], bool]) -> FindResult:
        """Last element matching predicate; drains the whole stream."""
        if short_circuits(self, "find_last"):
            return NOT_FOUND
        result = NOT_FOUND
        while self.next():
            element = self.get()
            if predicate(element):
                result = FindResult(element, True)
        return result

    def find_last_or(self, predicate: Callable[[T], bool], default: T) -> T:
        result = self.find_last(predicate)
        return result.value if result.found else default

    def find_index(self, predicate: Callable[[T], bool]) -> int:
        """Position of the first match in this stream, or -1."""
        if short_circuits(self, "find_index"):
            return -1
        index = 0
        while self.next():
            if predicate(self.get()):
                return index
            index += 1
        return -1

    def find_last_index(self, predicate: Callable[[T], bool]) -> int:
        """Position of the last match in this stream, or -1."""
        if short_circuits(self, "find_last_index"):
            return -1
        found = -1
        index = 0
        while self.next():
            if predicate(self.get()):
                found = index
            index += 1
        return found

    def count(self) -> int:
        """Count elements without reading them."""
        if short_circuits(self, "count"):
            return 0
        n = 0
        while self.next():
            n += 1
        return n

    def all(self, predicate: Callable[[T], bool]) -> bool:
        """
        True if every element matches.

        An empty stream gives False, unlike the builtin ``all``.
        """
        if short_circuits(self, "all"):
            return False
        seen = False
        while self.next():
            if not predicate(self.get()):
                return False
            seen = True
        return seen

    def any(self, predicate: Callable[[T], bool]) -> bool:
        """True as soon as one element matches; False on an empty stream."""
        if short_circuits(self, "any"):
            return False
        while self.next():
            if predicate(self.get()):
                return True
        return False
