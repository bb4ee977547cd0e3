""" Query Builder: listing kind + request => a filtered and ordered query """

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import sqlalchemy as sa

from gamepager import exc
from gamepager.sainfo.columns import resolve_column_by_name, primary_key_names, is_column_property_nullable
from gamepager.typing import SAModel, SACondition, Identity

from .cursor import ScanPosition
from .kind import ListingKind
from .sort import SortingField, SortingDirection


@dataclass
class ListingQuery:
    """ A fully specified query: what to scan, and in what order """
    # The model to scan
    Model: SAModel

    # WHERE conditions, ANDed together
    conditions: list[SACondition]

    # Ordering. The final fields are always the primary key: the ordering is total
    sort: tuple[SortingField, ...]

    @property
    def sort_names(self) -> tuple[str, ...]:
        return tuple(field.name for field in self.sort)

    def check_position(self, position: Optional[ScanPosition]):
        """ Check that a scan position was produced by a query sorted like this one

        Raises:
            exc.InvalidCursor
        """
        if position is None:
            return

        if tuple(position.cols) != self.sort_names:
            raise exc.InvalidCursor('the cursor belongs to a differently sorted listing')
        if len(position.val) != len(self.sort):
            raise exc.InvalidCursor('the cursor is damaged')

        # Values must fit their columns: the backend would choke on them otherwise
        for field, value in zip(self.sort, position.val):
            if not _value_fits_column(value, field.column(self.Model)):
                raise exc.InvalidCursor(f'the cursor has an invalid value for "{field.name}"')

    def statement(self) -> sa.sql.Select:
        """ Build the SELECT statement: filtered and ordered, no pagination yet """
        return (
            sa.select(self.Model.__table__)
            .where(*self.conditions)
            .order_by(*(field.order_by(self.Model) for field in self.sort))
        )


def build_query(kind: ListingKind, identity: Optional[Identity], filter_value: Optional[str] = None) -> ListingQuery:
    """ Build the query for a listing kind

    Args:
        kind: The listing kind
        identity: Id of the requesting user, or `None` for anonymous requests
        filter_value: Value for the kind's attribute filter. Empty values are ignored.

    Raises:
        exc.Unauthorized: the listing is private, but there's no identity
        exc.InvalidColumnError: the listing kind mentions an invalid column (programming error)
    """
    Model = kind.Model

    # Private listings are never built without an identity
    if identity is None and not kind.anonymous_allowed:
        raise exc.Unauthorized(kind.name)

    # Base filters
    conditions: list[SACondition] = [
        resolve_column_by_name(name, Model, where='filter') == value
        for name, value in kind.filter.items()
    ]

    # Ownership filter
    if kind.private:
        conditions.append(kind.ownership(identity))  # type: ignore[misc,arg-type]

    # Attribute filter: verbatim. Invalid values simply match nothing
    if filter_value and kind.filter_field:
        conditions.append(resolve_column_by_name(kind.filter_field, Model, where='filter') == filter_value)

    # Done
    return ListingQuery(
        Model=Model,
        conditions=conditions,
        sort=total_ordering(kind.sort_fields, Model),
    )


def total_ordering(sort: tuple[SortingField, ...], Model: SAModel) -> tuple[SortingField, ...]:
    """ Make sure the ordering is total: append primary key columns that are missing

    Keyset scanning needs every row to have a unique position.

    Raises:
        exc.ListingKindError: a sort column is nullable
    """
    names = {field.name for field in sort}
    sort = sort + tuple(
        SortingField(name=name, direction=SortingDirection.ASC)
        for name in primary_key_names(Model)
        if name not in names
    )

    # NULLs cannot be compared with keyset conditions
    for field in sort:
        if is_column_property_nullable(field.column(Model)):
            raise exc.ListingKindError(f'Cannot sort by a nullable column: {field.name}')

    return sort


def _value_fits_column(value, column: sa.orm.InstrumentedAttribute) -> bool:
    """ Check that a cursor value has the Python type of the column """
    try:
        python_type = column.expression.type.python_type
    except NotImplementedError:
        return True

    # JSON has no separate type for whole floats
    if python_type is float:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    # `bool` is an `int`, but it's not a number
    if python_type is int:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, python_type)
