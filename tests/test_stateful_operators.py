#!/usr/bin/env python3
"""
Tests for flat_map_concat, distinct, zip_with, zip_with_prev and scan.
"""

import threading
import unittest

from pullstream import Channel, Stream
from pullstream.streams import FlatMapConcatOperator, FlatMapState
from pullstream.sources import SequenceSource


class TestFlatMapConcat(unittest.TestCase):
    """Test flat_map_concat."""

    def test_drains_inner_before_next_outer(self):
        result = Stream.of("a", "b", "c", "d") \
            .flat_map_concat(lambda e: Stream.of(e, e)) \
            .collect()
        self.assertEqual(result, ["a", "a", "b", "b", "c", "c", "d", "d"])

    def test_inner_can_be_list_or_iterable(self):
        self.assertEqual(
            Stream.of(1, 2).flat_map_concat(lambda n: [n] * n).collect(),
            [1, 2, 2],
        )
        self.assertEqual(
            Stream.of(2, 3).flat_map_concat(range).collect(),
            [0, 1, 0, 1, 2],
        )

    def test_empty_inner_does_not_stop_stage(self):
        result = Stream.of(0, 1, 0, 0, 2, 0) \
            .flat_map_concat(lambda n: [n] * n) \
            .collect()
        self.assertEqual(result, [1, 2, 2])

    def test_none_inner_is_empty(self):
        result = Stream.of(1, 2, 3) \
            .flat_map_concat(lambda n: None if n == 2 else [n]) \
            .collect()
        self.assertEqual(result, [1, 3])

    def test_empty_outer(self):
        self.assertEqual(Stream.of().flat_map_concat(lambda e: [e, e]).collect(), [])

    def test_state_machine(self):
        stage = FlatMapConcatOperator(SequenceSource([1]), lambda n: [n, n])
        self.assertIs(stage.state, FlatMapState.NO_INNER_SOURCE)
        self.assertTrue(stage.next())
        self.assertIs(stage.state, FlatMapState.DRAINING_INNER)
        self.assertTrue(stage.next())
        self.assertFalse(stage.next())
        self.assertIs(stage.state, FlatMapState.NO_INNER_SOURCE)
        self.assertIsNone(stage.get())

    def test_inner_channel_fed_by_thread(self):
        def produce(e):
            channel = Channel()

            def run():
                channel.send(e)
                channel.send(e)
                channel.close()

            threading.Thread(target=run, daemon=True).start()
            return Stream.from_chan(channel)

        result = Stream.of("a", "b", "c", "d").flat_map_concat(produce).collect()
        self.assertEqual(result, ["a", "a", "b", "b", "c", "c", "d", "d"])


class TestDistinct(unittest.TestCase):
    """Test adjacency-based deduplication."""

    def test_distinct_is_adjacency_based(self):
        self.assertEqual(Stream.of("a", "a", "b", "a").distinct().collect(), ["a", "b", "a"])

    def test_distinct_by(self):
        data = [{"n": "a"}, {"n": "a"}, {"n": "b"}, {"n": "c"}, {"n": "a"}, {"n": "b"}]
        result = Stream.from_slice(data) \
            .distinct_by(lambda old, new: old is not None and old["n"] == new["n"]) \
            .map(lambda d: d["n"]) \
            .collect()
        self.assertEqual(result, ["a", "b", "c", "a", "b"])

    def test_distinct_by_is_idempotent(self):
        data = ["a", "a", "b", "c", "a", "b", "b", "b"]
        once = Stream.from_slice(data).distinct().collect()
        twice = Stream.from_slice(data).distinct().distinct().collect()
        self.assertEqual(once, twice)

    def test_first_element_always_emitted(self):
        calls = []

        def always_equal(old, new):
            calls.append((old, new))
            return True

        # cmp says "equal" for everything, only the first element survives
        result = Stream.of(None, 1, 2).distinct_by(always_equal).collect()
        self.assertEqual(result, [None])
        self.assertEqual(calls, [(None, None), (None, 1), (None, 2)])

    def test_first_comparison_gets_sentinel(self):
        calls = []

        def recording_cmp(old, new):
            calls.append((old, new))
            return old == new

        result = Stream.of("a", "b").distinct_by(recording_cmp).collect()
        self.assertEqual(result, ["a", "b"])
        self.assertEqual(calls, [(None, "a"), ("a", "b")])

    def test_compares_against_last_emitted(self):
        # 1 and 2 are "close", 3 is not close to 1
        close = lambda old, new: old is not None and abs(old - new) <= 1
        self.assertEqual(Stream.of(1, 2, 3, 10).distinct_by(close).collect(), [1, 3, 10])


class TestZip(unittest.TestCase):
    """Test zip_with and zip_with_prev."""

    def test_zip_with(self):
        result = Stream.of("a", "b", "c", "d") \
            .zip_with(Stream.of("1", "2", "3", "4"), lambda x, y: x + y) \
            .collect()
        self.assertEqual(result, ["a1", "b2", "c3", "d4"])

    def test_zip_with_shorter_side_wins(self):
        self.assertEqual(
            Stream.of("a", "b", "c", "d").zip_with([1, 2, 3], lambda x, y: (x, y)).count(),
            3,
        )
        self.assertEqual(
            Stream.of("a").zip_with(Stream.of(1, 2, 3), lambda x, y: (x, y)).collect(),
            [("a", 1)],
        )

    def test_zip_with_empty(self):
        self.assertEqual(Stream.of(1, 2).zip_with([], lambda x, y: x).collect(), [])

    def test_zip_with_prev(self):
        result = Stream.of(1, 2, 4, 7).zip_with_prev(lambda prev, cur: (prev, cur)).collect()
        self.assertEqual(result, [(None, 1), (1, 2), (2, 4), (4, 7)])

    def test_zip_with_prev_initial(self):
        deltas = Stream.of(1, 2, 4, 7).zip_with_prev(lambda prev, cur: cur - prev, initial=0).collect()
        self.assertEqual(deltas, [1, 1, 2, 3])

    def test_zip_with_prev_tracks_elements_not_read(self):
        stream = Stream.of("a", "b", "c").zip_with_prev(lambda prev, cur: (prev, cur))
        self.assertTrue(stream.next())
        self.assertTrue(stream.next())
        self.assertEqual(stream.get(), ("a", "b"))


class TestScan(unittest.TestCase):

    def test_scan(self):
        result = Stream.of("a", "b", "c", "d").scan("!", lambda acc, e: acc + e).collect()
        self.assertEqual(result, ["!a", "!ab", "!abc", "!abcd"])

    def test_scan_never_emits_seed(self):
        self.assertEqual(Stream.of().scan(0, lambda acc, e: acc + e).collect(), [])

    def test_running_sum(self):
        self.assertEqual(Stream.range(1, 5).scan(0, lambda acc, e: acc + e).collect(), [1, 3, 6, 10])


if __name__ == '__main__':
    unittest.main()
