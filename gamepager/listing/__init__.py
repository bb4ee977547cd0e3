""" The paginated listing engine

Turns an ordered, resumable backend scan into stable pages:
requested limit, backend-side filters, post-retrieval exclusions, and a cursor that never skips or duplicates rows.
"""

from .kind import ListingKind
from .query import ListingQuery, build_query
from .cursor import ScanPosition, encode_cursor, decode_cursor
from .backend import ScanBackend, ScanIterator, SAScanBackend, Candidate
from .puller import PagePuller, PulledRound
from .exclusion import ExclusionSource, ExclusionFilter, NoExclusion
from .refill import refill, ListingResult
from .response import ListingPage, Link, assemble
from .request import ListingRequest, parse_limit
from .settings import ListingSettings
from .listing import Listing
