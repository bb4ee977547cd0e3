from __future__ import annotations

import dataclasses
import os
from typing import Optional


@dataclasses.dataclass
class ListingSettings:
    """ Settings for listings

    Defines how many rows a page may have.
    """
    # The max number of items you get, regardless of the limit
    max_limit: int = 64

    # The `limit` you get by default, if not specified
    default_limit: Optional[int] = None

    def __post_init__(self):
        if self.default_limit is None:
            self.default_limit = self.max_limit
        self.default_limit = min(self.default_limit, self.max_limit)

    @classmethod
    def from_env(cls, prefix: str = 'GAMEPAGER_') -> ListingSettings:
        """ Load settings from environment variables: GAMEPAGER_MAX_LIMIT, GAMEPAGER_DEFAULT_LIMIT """
        kwargs = {}

        max_limit = os.getenv(f'{prefix}MAX_LIMIT')
        if max_limit:
            kwargs['max_limit'] = int(max_limit)

        default_limit = os.getenv(f'{prefix}DEFAULT_LIMIT')
        if default_limit:
            kwargs['default_limit'] = int(default_limit)

        return cls(**kwargs)

    def get_final_limit(self, limit: Optional[int]) -> int:
        """ Fine-tune the `limit` of a listing by applying default and max limits

        Clients cannot force unbounded pages: too large limits are clamped silently,
        and missing, zero, or negative ones get the default.
        """
        # Apply default limit
        if not limit or limit < 0:
            return self.default_limit  # type: ignore[return-value]

        # Apply max limit
        return min(limit, self.max_limit)
