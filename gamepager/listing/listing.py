""" Listing: serves pages of one listing kind """

from __future__ import annotations

import logging
from functools import partial

import sqlalchemy as sa

from .backend import ScanBackend, SAScanBackend
from .cursor import decode_cursor
from .exclusion import ExclusionFilter, NoExclusion
from .kind import ListingKind
from .puller import PagePuller
from .query import build_query
from .refill import refill
from .request import ListingRequest
from .response import ListingPage, assemble
from .settings import ListingSettings


logger = logging.getLogger(__name__)


class Listing:
    """ A listing: puts the Query Builder, Page Puller, Exclusion Filter, Refill Loop, and Response Assembler together

    Example:
        listing = Listing(open_games, SAScanBackend(connection), exclusion=ExclusionFilter(BanExclusion(connection)))
        page = listing.fetch(ListingRequest(identity='u1', limit=10))
    """
    kind: ListingKind
    puller: PagePuller
    exclusion: ExclusionFilter
    settings: ListingSettings

    def __init__(self, kind: ListingKind, backend: ScanBackend, *, exclusion: ExclusionFilter = None, settings: ListingSettings = None):
        self.kind = kind
        self.puller = PagePuller(backend)
        self.exclusion = exclusion or NoExclusion()
        self.settings = settings or ListingSettings()

    @classmethod
    def for_connection(cls, kind: ListingKind, connection: sa.engine.Connection, settings: ListingSettings = None):
        """ Make a Listing that scans an SqlAlchemy connection, with the kind's exclusion source """
        exclusion = ExclusionFilter(kind.exclusion(connection)) if kind.exclusion else None
        return cls(kind, SAScanBackend(connection), exclusion=exclusion, settings=settings)

    @classmethod
    def prepare(cls, kind: ListingKind, settings: ListingSettings = None):
        """ Prepare to make listings of this kind

        Example:
            list_open_games = Listing.prepare(open_games)
            page = list_open_games(connection).fetch(request)
        """
        return partial(cls.for_connection, kind, settings=settings)

    def fetch(self, request: ListingRequest, *, url: str = '') -> ListingPage:
        """ Fetch one page

        Raises:
            exc.Unauthorized: the listing requires an identity, but there's none
            exc.InvalidCursor: the cursor is malformed
            exc.BackendError: the backend or the exclusion lookup failed
        """
        # Everything that can fail on the client's side fails before the backend is touched
        limit = self.settings.get_final_limit(request.limit)
        query = build_query(self.kind, request.identity, request.filter_value)
        position = decode_cursor(request.cursor)
        query.check_position(position)

        # Pull and filter
        result = refill(self.puller, self.exclusion, query, position, request.identity, limit=limit)
        logger.info(f'Listing {self.kind.name!r}: {len(result.rows)} rows in {result.rounds} rounds, more={result.position is not None}')

        # Done
        return assemble(self.kind, result, request, limit=limit, url=url)
