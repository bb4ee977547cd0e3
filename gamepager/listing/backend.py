""" Query backend: ordered, filtered, resumable scans

Overview:

* ScanBackend runs a query from a position, one round at a time
* ScanIterator yields rows of that round and tracks the scan position
* SAScanBackend implements it with keyset pagination over an SqlAlchemy connection
"""

from __future__ import annotations

from collections import abc
from typing import Optional, NamedTuple

import sqlalchemy as sa

from gamepager.sainfo.columns import primary_key_names
from gamepager.typing import SARowDict

from .cursor import ScanPosition
from .query import ListingQuery


class Candidate(NamedTuple):
    """ A row fetched from the backend, and its primary key """
    key: tuple
    row: SARowDict


class ScanIterator(abc.Iterator[SARowDict]):
    """ Rows of one scan round

    Iterate it to get rows; look at `position` to know where the scan is.
    """
    # Position after the last yielded row. Before any rows are yielded, it's the starting position
    position: Optional[ScanPosition]

    # Does the scan have any more rows beyond this round?
    # Only meaningful once the iterator is consumed
    exhausted: bool

    def __next__(self) -> SARowDict:
        raise NotImplementedError


class ScanBackend:
    """ Query backend interface """

    def run(self, query: ListingQuery, start: Optional[ScanPosition], *, limit: int) -> ScanIterator:
        """ Start a scan round: at most `limit` rows after `start`

        Args:
            query: The query to scan
            start: The position to resume after; `None` to scan from the beginning
            limit: Max number of rows to get in this round

        Raises:
            Exception: any backend failure
        """
        raise NotImplementedError

    def primary_key(self, query: ListingQuery, row: SARowDict) -> tuple:
        """ Get the primary key of a row """
        return tuple(row[name] for name in primary_key_names(query.Model))


class SAScanBackend(ScanBackend):
    """ Keyset scans with SqlAlchemy

    Every round is a SELECT that continues after the last seen sort-key tuple:

        WHERE (a > :a) OR (a = :a AND b > :b)
        ORDER BY a, b
        LIMIT :limit + 1

    We always load one more row to check if there's anything beyond the round.
    """

    def __init__(self, connection: sa.engine.Connection):
        self.connection = connection

    __slots__ = 'connection',

    def statement(self, query: ListingQuery, start: Optional[ScanPosition], *, limit: int) -> sa.sql.Select:
        """ Build the SELECT statement for a scan round """
        stmt = query.statement()
        if start is not None:
            stmt = stmt.where(keyset_condition(query, start))
        return stmt.limit(limit + 1)

    def run(self, query: ListingQuery, start: Optional[ScanPosition], *, limit: int) -> SAScanIterator:
        stmt = self.statement(query, start, limit=limit)
        rows = [dict(row) for row in self.connection.execute(stmt).mappings()]
        return SAScanIterator(query.sort_names, start, rows, limit=limit)


class SAScanIterator(ScanIterator):
    """ Iterator over the rows of one SAScanBackend round """

    def __init__(self, cols: tuple[str, ...], start: Optional[ScanPosition], rows: list[SARowDict], *, limit: int):
        self.cols = cols
        self.position = start
        self.exhausted = len(rows) <= limit

        # The extra row is never yielded: it only tells us that the scan goes on
        self._rows = iter(rows[:limit])

    def __next__(self) -> SARowDict:
        row = next(self._rows)
        self.position = ScanPosition(cols=self.cols, val=tuple(row[name] for name in self.cols))
        return row


def keyset_condition(query: ListingQuery, start: ScanPosition) -> sa.sql.ColumnElement:
    """ Build the condition: rows that come after `start` in the query ordering

    Supports mixed sorting directions:

        (a < :a) OR (a = :a AND b > :b) OR (a = :a AND b = :b AND c > :c)
    """
    Model = query.Model
    clauses = []
    for i, field in enumerate(query.sort):
        # All previous fields are equal ...
        equal = [
            prev_field.column(Model) == prev_value
            for prev_field, prev_value in zip(query.sort[:i], start.val[:i])
        ]
        # ... and this one goes after
        clauses.append(sa.and_(*equal, field.after(Model, start.val[i])))

    return sa.or_(*clauses)
