"""Lazy pull-based stream pipelines."""

from pullstream.streams.stream import (
    Stream,
    FindResult,
    NOT_FOUND,
)
from pullstream.streams.operators import (
    StreamOperator,
    ComputedOperator,
    FilterOperator,
    MapOperator,
    MapIndexedOperator,
    TakeOperator,
    SkipOperator,
    OnEachOperator,
)
from pullstream.streams.stateful import (
    FlatMapState,
    FlatMapConcatOperator,
    DistinctOperator,
    ZipWithOperator,
    ZipWithPrevOperator,
    ScanOperator,
)
from pullstream.streams.collectors import (
    collect_as,
    for_each_as,
    for_each_indexed_as,
    reduce_as,
    find_or_as,
)

__all__ = [
    "Stream",
    "FindResult",
    "NOT_FOUND",
    "StreamOperator",
    "ComputedOperator",
    "FilterOperator",
    "MapOperator",
    "MapIndexedOperator",
    "TakeOperator",
    "SkipOperator",
    "OnEachOperator",
    "FlatMapState",
    "FlatMapConcatOperator",
    "DistinctOperator",
    "ZipWithOperator",
    "ZipWithPrevOperator",
    "ScanOperator",
    "collect_as",
    "for_each_as",
    "for_each_indexed_as",
    "reduce_as",
    "find_or_as",
]
