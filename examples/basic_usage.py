#!/usr/bin/env python3
"""
Basic usage examples for pullstream.
"""

import logging
import threading

from pullstream import Channel, Stream, collect_as


class Todo:
    def __init__(self, user_id, todo_id, title):
        self.user_id = user_id
        self.id = todo_id
        self.title = title

    def __repr__(self):
        return f"Todo({self.user_id}, {self.id}, {self.title!r})"


TODOS = [
    Todo(1, 1, "sunt aut facere repellat provident occaecati excepturi optio reprehenderit"),
    Todo(1, 2, "qui est esse"),
    Todo(1, 3, "ea molestias quasi exercitationem repellat qui ipsa sit aut"),
    Todo(2, 11, "et ea vero quia laudantium autem"),
    Todo(2, 12, "in quibusdam tempore odit est dolorem"),
]


class TodoSource:
    """A cursor over todos; anything with next/get plugs into a Stream."""

    def __init__(self, todos):
        self.idx = -1
        self.todos = todos

    def next(self):
        if self.idx + 1 < len(self.todos):
            self.idx += 1
            return True
        return False

    def get(self):
        return self.todos[self.idx]


def example_filter_map():
    """Example: filter then map an in-memory list."""
    print("\n=== Filter / Map Example ===")

    names = ["a", "bbb", "c", "dddd", "e", "fffff", "g", "hhhhh", "i"]
    Stream.from_slice(names) \
        .filter(lambda name: len(name) == 1) \
        .map(lambda name: name + "!") \
        .for_each(print)


def example_custom_source():
    """Example: plug a hand-written cursor into a pipeline."""
    print("\n=== Custom Source Example ===")

    count = Stream.from_source(TodoSource(TODOS)) \
        .filter(lambda todo: todo.user_id == 1) \
        .count()
    print(f"todos for user 1: {count}")

    titles = collect_as(
        Stream.from_source(TodoSource(TODOS))
            .filter(lambda todo: todo.user_id == 2)
            .map(lambda todo: todo.title),
        str,
    )
    for title in titles:
        print(title)


def example_channel():
    """Example: consume elements produced on another thread."""
    print("\n=== Channel Example ===")

    jobs = Channel()

    def producer():
        for i in range(5):
            jobs.send(i)
        # Close so the consumer knows no more jobs follow
        jobs.close()

    threading.Thread(target=producer, daemon=True).start()

    Stream.from_chan(jobs) \
        .on_each(lambda job: print(f"job: {job} -> ", end="")) \
        .map(lambda job: job * 100) \
        .for_each(lambda result: print(f"got: {result}"))


def example_stateful():
    """Example: scan, distinct and zip."""
    print("\n=== Stateful Operators Example ===")

    readings = [3, 3, 4, 4, 4, 2, 3]
    changes = Stream.from_slice(readings).distinct().collect()
    print(f"Changes: {changes}")

    running = Stream.from_slice(readings).scan(0, lambda acc, r: acc + r).collect()
    print(f"Running total: {running}")

    deltas = Stream.from_slice(readings) \
        .zip_with_prev(lambda prev, cur: cur - prev, initial=readings[0]) \
        .collect()
    print(f"Deltas: {deltas}")

    labelled = Stream.of("a", "b", "c").zip_with(Stream.range(1, 100), lambda s, n: f"{s}{n}").collect()
    print(f"Labelled: {labelled}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    example_filter_map()
    example_custom_source()
    example_channel()
    example_stateful()
