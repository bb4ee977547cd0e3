from __future__ import annotations

import sqlalchemy as sa
from sqlalchemy.orm import ColumnProperty
from sqlalchemy.orm import (  # type: ignore[attr-defined]  # sqlalchemy stubs not updated
    InstrumentedAttribute,
    MapperProperty,
)

from gamepager.sainfo.names import model_name
from gamepager.typing import SAModel, SAAttribute
from gamepager import exc


def resolve_column_by_name(field_name: str, Model: SAModel, *, where: str) -> InstrumentedAttribute:
    """ Get a column attribute of the Model by name, or fail

    Raises:
        exc.InvalidColumnError: no such column (programming error)
    """
    try:
        attribute = getattr(Model, field_name)
    except AttributeError as e:
        raise exc.InvalidColumnError(model_name(Model), field_name, where=where) from e

    # Check that it actually is a column
    if not is_column_property(attribute):
        raise exc.InvalidColumnError(model_name(Model), field_name, where=where)

    # Done
    return attribute


def is_column_property(attribute: SAAttribute) -> bool:
    return (
        isinstance(attribute, (InstrumentedAttribute, MapperProperty)) and
        isinstance(attribute.property, ColumnProperty) and
        isinstance(attribute.expression, sa.Column)  # not an expression, but a real column
    )


def primary_key_names(Model: SAModel) -> tuple[str, ...]:
    """ Get names of the primary key columns, in order """
    return tuple(column.key for column in sa.inspect(Model).primary_key)


def is_column_property_nullable(column_property: sa.orm.ColumnProperty) -> bool:
    """ Check whether a column property is nullable """
    return column_property.expression.nullable
