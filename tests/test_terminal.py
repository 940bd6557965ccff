#!/usr/bin/env python3
"""
Tests for terminal operations.
"""

import unittest

from pullstream import FindResult, Stream
from pullstream.sources import SequenceSource


class GetForbiddenSource(SequenceSource):
    """A source that fails the test if anything reads its elements."""

    def get(self):
        raise AssertionError("get() must not be called")


class TestCollect(unittest.TestCase):

    def test_collect_to_appends(self):
        target = ["x"]
        result = Stream.of("a", "b").collect_to(target)
        self.assertIs(result, target)
        self.assertEqual(target, ["x", "a", "b"])

    def test_for_each(self):
        seen = []
        Stream.of(3, 1, 2).for_each(seen.append)
        self.assertEqual(seen, [3, 1, 2])

    def test_for_each_indexed(self):
        seen = []
        Stream.of("a", "b", "c").for_each_indexed(lambda i, e: seen.append((i, e)))
        self.assertEqual(seen, [(0, "a"), (1, "b"), (2, "c")])


class TestReduceFold(unittest.TestCase):
    """Test reduce and fold."""

    def test_reduce(self):
        self.assertEqual(Stream.of("a", "b", "c", "d").reduce(lambda acc, e: acc + e), "abcd")

    def test_reduce_empty_is_none(self):
        self.assertIsNone(Stream.of().reduce(lambda acc, e: acc + e))

    def test_reduce_single_element_skips_reducer(self):
        def reducer(acc, e):
            raise AssertionError("reducer must not be called")

        self.assertEqual(Stream.of(7).reduce(reducer), 7)

    def test_fold(self):
        self.assertEqual(Stream.of("a", "b", "c", "d").fold("!", lambda acc, e: acc + e), "!abcd")

    def test_fold_empty_returns_init(self):
        init = ["seed"]
        self.assertIs(Stream.of().fold(init, lambda acc, e: acc + [e]), init)


class TestFind(unittest.TestCase):
    """Test find, find_last and their index variants."""

    def setUp(self):
        self.data = ["a", "b", "c", "b", "d"]

    def test_find(self):
        self.assertEqual(Stream.from_slice(self.data).find(lambda e: e > "a"), FindResult("b", True))

    def test_find_not_found(self):
        result = Stream.from_slice(self.data).find(lambda e: e == "z")
        self.assertFalse(result.found)
        self.assertIsNone(result.value)

    def test_find_tells_falsy_match_from_miss(self):
        value, found = Stream.of(3, 0, 5).find(lambda e: e == 0)
        self.assertTrue(found)
        self.assertEqual(value, 0)

    def test_find_short_circuits(self):
        pulled = []
        Stream.of(1, 2, 3, 4).on_each(pulled.append).find(lambda e: e == 2)
        self.assertEqual(pulled, [1, 2])

    def test_find_or(self):
        self.assertEqual(Stream.from_slice(self.data).find_or(lambda e: e == "c", "?"), "c")
        self.assertEqual(Stream.from_slice(self.data).find_or(lambda e: e == "z", "?"), "?")

    def test_find_last(self):
        data = [("b", 1), ("c", 2), ("b", 3)]
        result = Stream.from_slice(data).find_last(lambda e: e[0] == "b")
        self.assertEqual(result, FindResult(("b", 3), True))
        self.assertFalse(Stream.from_slice(data).find_last(lambda e: False).found)

    def test_find_last_drains_stream(self):
        pulled = []
        Stream.of(1, 2, 3).on_each(pulled.append).find_last(lambda e: e == 1)
        self.assertEqual(pulled, [1, 2, 3])

    def test_find_last_or(self):
        self.assertEqual(Stream.of(1, 2, 3, 4).find_last_or(lambda e: e % 2 == 1, -1), 3)
        self.assertEqual(Stream.of(2, 4).find_last_or(lambda e: e % 2 == 1, -1), -1)

    def test_find_index(self):
        self.assertEqual(Stream.from_slice(self.data).find_index(lambda e: e == "a"), 0)
        self.assertEqual(Stream.from_slice(self.data).find_index(lambda e: e == "d"), 4)
        self.assertEqual(Stream.from_slice(self.data).find_index(lambda e: e == "b"), 1)
        self.assertEqual(Stream.from_slice(self.data).find_index(lambda e: False), -1)

    def test_find_last_index(self):
        self.assertEqual(Stream.from_slice(self.data).find_last_index(lambda e: e == "b"), 3)
        self.assertEqual(Stream.from_slice(self.data).find_last_index(lambda e: e == "a"), 0)
        self.assertEqual(Stream.from_slice(self.data).find_last_index(lambda e: False), -1)

    def test_index_is_position_in_stage_output(self):
        index = Stream.from_slice(self.data) \
            .filter(lambda e: e != "a") \
            .find_index(lambda e: e == "c")
        self.assertEqual(index, 1)


class TestCount(unittest.TestCase):

    def test_count(self):
        self.assertEqual(Stream.range(10).filter(lambda n: n % 3 == 0).count(), 4)

    def test_count_empty(self):
        self.assertEqual(Stream.of().count(), 0)
        self.assertEqual(Stream(GetForbiddenSource([])).count(), 0)

    def test_count_never_reads_elements(self):
        self.assertEqual(Stream(GetForbiddenSource([1, 2, 3])).count(), 3)

    def test_count_skips_map_function(self):
        def boom(e):
            raise AssertionError("map must not run")

        self.assertEqual(Stream(GetForbiddenSource([1, 2])).map(boom).take(5).count(), 2)


class TestAllAny(unittest.TestCase):
    """Test all and any."""

    def test_all(self):
        self.assertTrue(Stream.of(2, 4, 6).all(lambda n: n % 2 == 0))
        self.assertFalse(Stream.of(2, 3, 6).all(lambda n: n % 2 == 0))

    def test_any(self):
        self.assertTrue(Stream.of(1, 3, 4).any(lambda n: n % 2 == 0))
        self.assertFalse(Stream.of(1, 3).any(lambda n: n % 2 == 0))

    def test_empty_stream_is_false_for_both(self):
        self.assertFalse(Stream.of().all(lambda n: True))
        self.assertFalse(Stream.of().any(lambda n: True))

    def test_short_circuit(self):
        pulled = []
        Stream.of(1, 2, 3).on_each(pulled.append).all(lambda n: n < 2)
        self.assertEqual(pulled, [1, 2])

        pulled = []
        Stream.of(1, 2, 3).on_each(pulled.append).any(lambda n: n == 1)
        self.assertEqual(pulled, [1])


if __name__ == '__main__':
    unittest.main()
