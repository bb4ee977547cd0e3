from typing import Optional

import fastapi


def user_from_header(
        x_user_id: Optional[str] = fastapi.Header(
            None,
            title='Id of the authenticated user',
            description='Set by the authenticating proxy. Missing for anonymous requests.',
        ),
) -> Optional[str]:
    """ Default identity resolver: trust the `X-User-Id` header

    Applications with real authentication provide their own resolver to `listing_router()`.
    """
    return x_user_id or None
