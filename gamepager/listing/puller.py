""" Page Puller: one backend round at a time """

from __future__ import annotations

from typing import Optional, NamedTuple

from gamepager import exc

from .backend import ScanBackend, Candidate
from .cursor import ScanPosition
from .query import ListingQuery


class PulledRound(NamedTuple):
    """ Result of one pull round """
    # Raw rows, in backend order
    candidates: list[Candidate]

    # Position after the last candidate
    position: Optional[ScanPosition]

    # Has the scan run out of rows?
    exhausted: bool


class PagePuller:
    """ Pulls raw candidates from the backend, round by round """

    def __init__(self, backend: ScanBackend):
        self.backend = backend

    __slots__ = 'backend',

    def pull(self, query: ListingQuery, position: Optional[ScanPosition], *, limit: int) -> PulledRound:
        """ Pull one round: at most `limit` candidates after `position`

        Raises:
            exc.BackendError: the backend has failed, or the scan does not make progress
        """
        assert limit > 0

        try:
            iterator = self.backend.run(query, position, limit=limit)
            candidates = [
                Candidate(key=self.backend.primary_key(query, row), row=row)
                for row in iterator
            ]
        except exc.BaseGamepagerException:
            raise
        except Exception as e:
            raise exc.BackendError(f'Query backend failed: {e}') from e

        # Forward progress: either we got rows, or the scan is over.
        # Otherwise we would spin against the same position forever
        if not candidates and not iterator.exhausted:
            raise exc.BackendError('Query backend made no progress')

        # Done
        return PulledRound(candidates=candidates, position=iterator.position, exhausted=iterator.exhausted)
