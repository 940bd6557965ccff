"""
Terminal operations that check element types at the edge of the pipeline.

Intermediate stages treat elements as opaque values. These collectors
restore the caller's declared element type when the values leave the
pipeline and fail loudly with ``StreamTypeError`` when an element is not
of that type; nothing is coerced or dropped.
"""

from typing import Any, Callable, List, Optional, Type, TypeVar

from pullstream.exceptions import StreamTypeError
from pullstream.streams.stream import Stream, check_memory, short_circuits

T = TypeVar('T')


def _restore(value: Any, element_type: Type[T]) -> T:
    if not isinstance(value, element_type):
        raise StreamTypeError(
            "expected element of type {}, got {!r}".format(element_type.__name__, value),
            value=value,
            expected=element_type,
        )
    return value


def collect_as(stream: Stream, element_type: Type[T],
               target: Optional[List[T]] = None) -> List[T]:
    """Collect into ``target`` (a new list by default), checking each element."""
    if target is None:
        target = []
    if short_circuits(stream, "collect_as"):
        return target
    collected = 0
    while stream.next():
        target.append(_restore(stream.get(), element_type))
        collected += 1
        check_memory(collected)
    return target


def for_each_as(stream: Stream, element_type: Type[T],
                visit: Callable[[T], Any]) -> None:
    if short_circuits(stream, "for_each_as"):
        return
    while stream.next():
        visit(_restore(stream.get(), element_type))


def for_each_indexed_as(stream: Stream, element_type: Type[T],
                        visit: Callable[[int, T], Any]) -> None:
    if short_circuits(stream, "for_each_indexed_as"):
        return
    index = 0
    while stream.next():
        visit(index, _restore(stream.get(), element_type))
        index += 1


def reduce_as(stream: Stream, element_type: Type[T],
              accumf: Callable[[T, T], T]) -> Optional[T]:
    """Typed ``Stream.reduce``; the accumulated result is checked too."""
    if short_circuits(stream, "reduce_as") or not stream.next():
        return None
    result = _restore(stream.get(), element_type)
    while stream.next():
        result = _restore(accumf(result, _restore(stream.get(), element_type)), element_type)
    return result


def find_or_as(stream: Stream, element_type: Type[T],
               predicate: Callable[[T], bool], default: T) -> T:
    if short_circuits(stream, "find_or_as"):
        return default
    while stream.next():
        element = _restore(stream.get(), element_type)
        if predicate(element):
            return element
    return default
