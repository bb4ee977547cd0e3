from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from gamepager.typing import Identity


@dataclass
class ListingRequest:
    """ A request for one page of a listing """
    # Id of the requesting user, or `None` when anonymous
    identity: Optional[Identity] = None

    # Requested page size. Clamped by ListingSettings
    limit: Optional[int] = None

    # Value for the listing's attribute filter, e.g. a variant name
    filter_value: Optional[str] = None

    # Opaque cursor from the previous page. `None` to start from the beginning
    cursor: Optional[str] = None


def parse_limit(limit: Optional[str]) -> Optional[int]:
    """ Parse the `limit` request parameter leniently: anything that's not an integer is just ignored """
    if limit is None:
        return None

    try:
        return int(limit)
    except ValueError:
        return None
