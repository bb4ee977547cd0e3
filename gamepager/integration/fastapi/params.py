from collections import abc
from typing import Optional

import fastapi

from gamepager.listing import ListingKind, ListingRequest, parse_limit


def listing_request_param(kind: ListingKind, get_identity: abc.Callable) -> abc.Callable[..., ListingRequest]:
    """ Make a dependency that gets a ListingRequest for `kind` from the request parameters

    Example:
        /games/open?limit=10&variant=Classical&cursor=keys:...
    """
    def listing_request(
            request: fastapi.Request,
            limit: Optional[str] = fastapi.Query(
                None,
                title='Pagination. The number of items to include.',
                description='Invalid, zero, and negative values give the default page size. Large values are clamped.',
            ),
            cursor: Optional[str] = fastapi.Query(
                None,
                title='Pagination. Opaque cursor to the next page.',
                description='Take it from the previous page.',
            ),
            identity: Optional[str] = fastapi.Depends(get_identity),
    ) -> ListingRequest:
        # The attribute filter parameter is named by the listing kind
        filter_value = request.query_params.get(kind.filter_param) if kind.filter_param else None

        return ListingRequest(
            identity=identity,
            limit=parse_limit(limit),
            filter_value=filter_value,
            cursor=cursor,
        )

    return listing_request
