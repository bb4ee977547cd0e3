""" Refill Loop: pull and filter until the page is full """

from __future__ import annotations

import logging
from typing import Optional, NamedTuple

from gamepager.typing import SARowDict, Identity

from .cursor import ScanPosition
from .exclusion import ExclusionFilter
from .puller import PagePuller
from .query import ListingQuery


logger = logging.getLogger(__name__)


class ListingResult(NamedTuple):
    """ The result of a refill loop """
    # Rows to show, in backend order
    rows: list[SARowDict]

    # Where the next page starts. `None` when the scan is exhausted
    position: Optional[ScanPosition]

    # How many rounds it took
    rounds: int


def refill(puller: PagePuller,
           exclusion: ExclusionFilter,
           query: ListingQuery,
           position: Optional[ScanPosition],
           identity: Optional[Identity],
           *,
           limit: int) -> ListingResult:
    """ Pull rounds and exclude rows until the page is full, or the scan is exhausted

    A page is never under-filled unless the scan has run out of rows.
    Every round only requests the shortfall, so the page never overshoots, and the position
    always points right after the last raw row consumed: excluded or not.

    There is no upper bound on the number of rounds: every round either advances the position
    or ends the scan (see PagePuller), and pages are small.

    Raises:
        exc.BackendError: any round has failed. No partial page.
    """
    results: list[SARowDict] = []
    rounds = 0

    while True:
        rounds += 1
        pulled = puller.pull(query, position, limit=limit - len(results))
        kept = exclusion.exclude(pulled.candidates, identity)

        position = pulled.position
        results.extend(candidate.row for candidate in kept)
        logger.debug(f'Refill round #{rounds}: pulled {len(pulled.candidates)}, kept {len(kept)}, exhausted={pulled.exhausted}')

        if len(results) >= limit or pulled.exhausted:
            break

    # Done
    return ListingResult(
        rows=results[:limit],
        position=None if pulled.exhausted else position,
        rounds=rounds,
    )
