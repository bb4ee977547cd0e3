""" Listing kinds: configuration that makes a listing out of the shared engine """

from __future__ import annotations

from collections import abc
from dataclasses import dataclass, field
from typing import Any, Optional, TYPE_CHECKING

from gamepager import exc
from gamepager.typing import SAModel, SACondition, Identity

from .sort import SortingField, parse_sort


if TYPE_CHECKING:
    import sqlalchemy as sa
    from .exclusion import ExclusionSource


# Ownership filter factory: given the requester's id, build a WHERE condition
OwnershipCallable = abc.Callable[[Identity], SACondition]

# Exclusion data source factory: given a connection, make a source
ExclusionSourceFactory = abc.Callable[['sa.engine.Connection'], 'ExclusionSource']


@dataclass
class ListingKind:
    """ A registered listing: one configuration record per listing

    All listing kinds share one engine; they only differ in what's configured here.

    Example:
        open_games = ListingKind(
            name='open-games',
            desc=[['Open games', 'Open games, sorted with fullest and oldest first.']],
            Model=Game,
            filter={'closed': False},
            sort=['n_members-', 'created_at'],
            exclusion=BanExclusion,
        )
    """
    # Machine name of the listing
    name: str

    # Human-readable description: a list of [title, paragraph, paragraph, ...] sections
    desc: list[list[str]]

    # The model to list
    Model: SAModel

    # Base filters: { column name => value } equality conditions, ANDed together
    filter: dict[str, Any] = field(default_factory=dict)

    # Ordering: list of "field", "field+", "field-"
    sort: list[str] = field(default_factory=list)

    # Private listing: restricted to the requester's own records
    private: bool = False

    # Ownership filter factory. Required for private listings
    ownership: Optional[OwnershipCallable] = None

    # Attribute filter: the name of the request parameter, and the column it compares with
    filter_param: Optional[str] = None
    filter_field: Optional[str] = None

    # Exclusion data source factory. `None` for listings with nothing to hide
    exclusion: Optional[ExclusionSourceFactory] = None

    # Refuse anonymous requests even though the listing is public
    requires_identity: bool = False

    def __post_init__(self):
        if self.private and self.ownership is None:
            raise exc.ListingKindError(f'Private listing "{self.name}" must have an ownership filter')
        if (self.filter_param is None) != (self.filter_field is None):
            raise exc.ListingKindError(f'Listing "{self.name}": set both `filter_param` and `filter_field`, or neither')

    @property
    def title(self) -> str:
        """ Short human-readable name """
        return self.desc[0][0] if self.desc else self.name

    @property
    def sort_fields(self) -> tuple[SortingField, ...]:
        return parse_sort(self.sort)

    @property
    def anonymous_allowed(self) -> bool:
        return not (self.private or self.requires_identity)
