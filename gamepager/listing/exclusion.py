""" Exclusion Filter: hide rows the requester must not see

Applied after the rows are pulled from the backend, before they count toward the page.
"""

from __future__ import annotations

from typing import Optional

from gamepager import exc
from gamepager.typing import Identity

from .backend import Candidate


class ExclusionSource:
    """ Exclusion data source: decides which candidates to hide from a requester """

    def excluded_keys(self, candidates: list[Candidate], identity: Identity) -> set[tuple]:
        """ Check a batch of candidates, get the primary keys of those to exclude """
        raise NotImplementedError


class ExclusionFilter:
    """ Removes excluded candidates, keeps the order of the rest """

    def __init__(self, source: ExclusionSource):
        self.source = source

    __slots__ = 'source',

    def exclude(self, candidates: list[Candidate], identity: Optional[Identity]) -> list[Candidate]:
        """ Get candidates that are not excluded

        Anonymous requesters have nothing to exclude.

        Raises:
            exc.BackendError: the exclusion lookup has failed. Partial filtering is never accepted.
        """
        if not candidates or identity is None:
            return candidates

        try:
            excluded = self.source.excluded_keys(candidates, identity)
        except exc.BaseGamepagerException:
            raise
        except Exception as e:
            raise exc.BackendError(f'Exclusion lookup failed: {e}') from e

        return [candidate for candidate in candidates if candidate.key not in excluded]


class NoExclusion(ExclusionFilter):
    """ Exclusion Filter that keeps everything """

    def __init__(self):
        super().__init__(source=None)  # type: ignore[arg-type]

    def exclude(self, candidates: list[Candidate], identity: Optional[Identity]) -> list[Candidate]:
        return candidates
