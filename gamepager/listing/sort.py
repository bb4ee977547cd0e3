""" Listing ordering: the "sort" definition of a listing kind """

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import sqlalchemy as sa

from gamepager.sainfo.columns import resolve_column_by_name
from gamepager.typing import SAModel


class SortingDirection(Enum):
    ASC = '+'
    DESC = '-'


@dataclass(frozen=True)
class SortingField:
    """ A field to sort with, and its direction """
    name: str
    direction: SortingDirection

    __slots__ = 'name', 'direction'

    @classmethod
    def parse(cls, field: str) -> SortingField:
        """ Parse a field string: "name", "name+", "name-" """
        # Look at the ending character
        end_c = field[-1:]

        # If there's a sorting character, use it
        if end_c == '-' or end_c == '+':
            return cls(name=field[:-1], direction=SortingDirection(end_c))
        # Otherwise, use default sorting
        else:
            return cls(name=field, direction=SortingDirection.ASC)

    def export(self) -> str:
        return f'{self.name}{self.direction.value}'

    def column(self, Model: SAModel) -> sa.Column:
        return resolve_column_by_name(self.name, Model, where='sort')

    def order_by(self, Model: SAModel) -> sa.sql.ColumnElement:
        """ Get the ORDER BY clause for this field """
        column = self.column(Model)
        return column.asc() if self.direction == SortingDirection.ASC else column.desc()

    def after(self, Model: SAModel, value) -> sa.sql.ColumnElement:
        """ Get the expression: rows that go after `value` in this ordering """
        column = self.column(Model)
        return column > value if self.direction == SortingDirection.ASC else column < value


def parse_sort(sort: list[str]) -> tuple[SortingField, ...]:
    """ Parse a list of sort fields: [ "n_members-", "created_at" ] """
    return tuple(SortingField.parse(field) for field in sort)
