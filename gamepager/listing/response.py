""" Response Assembler: wrap a page into a listing envelope """

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Any
from urllib.parse import urlencode

from .cursor import encode_cursor
from .kind import ListingKind
from .refill import ListingResult
from .request import ListingRequest


@dataclass
class Link:
    """ A link to a related page """
    rel: str
    url: str

    def dict(self) -> dict:
        return {'rel': self.rel, 'url': self.url}


@dataclass
class ListingPage:
    """ A page of a listing: the envelope the client gets """
    # Listing name and description
    name: str
    desc: list[list[str]]

    # The rows
    items: list[dict]

    # Links: "self", and "next" if there may be more rows
    links: list[Link] = field(default_factory=list)

    # Cursor to the next page. `None` if the listing is over
    cursor: Optional[str] = None

    # The final page size used
    limit: int = 0

    def link(self, rel: str) -> Optional[Link]:
        """ Find a link by its `rel` """
        for link in self.links:
            if link.rel == rel:
                return link
        return None

    def dict(self) -> dict[str, Any]:
        return {
            'name': self.name,
            'desc': self.desc,
            'items': self.items,
            'links': [link.dict() for link in self.links],
            'cursor': self.cursor,
            'limit': self.limit,
        }


def assemble(kind: ListingKind, result: ListingResult, request: ListingRequest, *, limit: int, url: str = '') -> ListingPage:
    """ Assemble the listing envelope

    Args:
        kind: The listing kind: provides the name and the description
        result: Refill loop result
        request: The original request: links retain its filter
        limit: The final page size
        url: Path of the listing, to build links with
    """
    cursor = encode_cursor(result.position) if result.position is not None else None

    # Links retain the attribute filter
    params: dict[str, Any] = {}
    if request.filter_value and kind.filter_param:
        params[kind.filter_param] = request.filter_value

    links = [Link('self', _url(url, **params, limit=limit, cursor=request.cursor))]
    if cursor is not None:
        links.append(Link('next', _url(url, **params, limit=limit, cursor=cursor)))

    # Done
    return ListingPage(
        name=kind.name,
        desc=kind.desc,
        items=result.rows,
        links=links,
        cursor=cursor,
        limit=limit,
    )


def _url(path: str, **params) -> str:
    """ Make a URL with query parameters. Empty parameters are skipped """
    query = urlencode({k: v for k, v in params.items() if v})
    return f'{path}?{query}' if query else path
