#!/usr/bin/env python3
"""
Feed rows of an SQLite query into a pipeline.

Errors from the database surface here, in the adapter, never through
``next``/``get``.
"""

import logging
import sqlite3
import sys
from typing import Optional, Tuple

from pullstream import Source, Stream

logger = logging.getLogger(__name__)


class SQLiteSource(Source[Tuple]):
    """Run ``query`` lazily on the first ``next()`` and walk its rows."""

    def __init__(self, conn: sqlite3.Connection, query: str):
        self.conn = conn
        self.query = query
        self._cursor: Optional[sqlite3.Cursor] = None
        self._row: Optional[Tuple] = None
        self._done = False

    def next(self) -> bool:
        if self._done:
            return False
        if self._cursor is None:
            self._cursor = self.conn.execute(self.query)
        self._row = self._cursor.fetchone()
        if self._row is None:
            self._done = True
            return False
        return True

    def get(self) -> Optional[Tuple]:
        return self._row


def main(path: str = ":memory:") -> None:
    conn = sqlite3.connect(path)
    try:
        if path == ":memory:":
            conn.execute("CREATE TABLE geometry (type TEXT, coordinates TEXT)")
            conn.executemany("INSERT INTO geometry VALUES (?, ?)", [
                ("Point", "[127.0604505,37.5079355]"),
                ("Point", "[126.9779692,37.566535]"),
                ("LineString", "[[127.0,37.5],[127.1,37.6]]"),
            ])

        points = Stream.from_source(SQLiteSource(conn, "SELECT type, coordinates FROM geometry")) \
            .filter(lambda row: row[0] == "Point") \
            .map(lambda row: row[1]) \
            .collect()
        for point in points:
            logger.info("point %s", point)
    finally:
        conn.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main(*sys.argv[1:])
