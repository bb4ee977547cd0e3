""" Cursor Codec: scan positions as opaque strings """

from __future__ import annotations

import base64
import json
from collections import abc
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional, NamedTuple
from uuid import UUID

from gamepager import exc


# Prefix for our cursors, so that the user sees what's up
CURSOR_PREFIX = 'keys'

# Longer cursors are refused without decoding
MAX_CURSOR_LENGTH = 4096


class ScanPosition(NamedTuple):
    """ A backend scan position: "resume scanning after this row"

    The engine never compares positions; it only replays them to the backend that produced them.
    """
    # Names of the columns that define the ordering.
    # Is only used to check that the user isn't feeding a cursor into a differently sorted listing
    cols: tuple[str, ...]

    # Values of these columns in the last consumed row
    val: tuple

    def serialize(self) -> dict:
        return {'cols': list(self.cols), 'val': list(self.val)}

    @classmethod
    def unserialize(cls, data: dict) -> ScanPosition:
        cols, val = data['cols'], data['val']  # KeyError
        if not isinstance(cols, list) or not isinstance(val, list) or not all(isinstance(c, str) for c in cols):
            raise ValueError('Malformed cursor data')
        if not all(isinstance(v, _SCALAR_TYPES) for v in val):
            raise ValueError('Malformed cursor values')
        return cls(cols=tuple(cols), val=tuple(val))


# Values that a scan position may contain
_SCALAR_TYPES = (str, int, float, bool, date, time, Decimal, UUID)


def encode_cursor(position: ScanPosition) -> str:
    """ Encode a scan position as an opaque cursor string """
    return encode_opaque_cursor(CURSOR_PREFIX, position.serialize())


def decode_cursor(cursor: Optional[str]) -> Optional[ScanPosition]:
    """ Decode an opaque cursor string into a scan position

    An empty cursor means "start from the beginning": `None`

    Raises:
        exc.InvalidCursor: the cursor is malformed, or has not been produced by `encode_cursor()`
    """
    if not cursor:
        return None
    if len(cursor) > MAX_CURSOR_LENGTH:
        raise exc.InvalidCursor('the cursor is too long')

    try:
        prefix, data = decode_opaque_cursor(cursor)
        if prefix != CURSOR_PREFIX:
            raise ValueError(f'Unknown cursor type: {prefix!r}')
        return ScanPosition.unserialize(data)
    except (ValueError, TypeError, KeyError, RecursionError) as e:  # RecursionError: deeply nested JSON
        raise exc.InvalidCursor(str(e) or type(e).__name__) from e


def encode_opaque_cursor(prefix: str, data: dict) -> str:
    """ Encode a dict of data as an opaque cursor. Give it a nice prefix """
    return prefix + ':' + base64.b85encode(json.dumps(data, default=_json_default).encode()).decode()


def decode_opaque_cursor(data: str) -> tuple[str, dict]:
    """ Decode an opaque cursor into a (prefix, data dict) tuple

    Raises:
        ValueError: all sorts of errors related to bad cursor
    """
    prefix, data_encoded = data.split(':', 1)  # ValueError
    decoded = json.loads(base64.b85decode(data_encoded), object_hook=_json_object_hook)  # binascii.Error, JSONDecodeError
    if not isinstance(decoded, dict):
        raise ValueError('Malformed cursor data')
    return prefix, decoded


def _json_default(value):
    """ Serialize values that JSON doesn't support: tag them """
    for tag, (type_, dump, _) in _TAGGED_TYPES.items():
        if isinstance(value, type_):
            return {tag: dump(value)}
    raise TypeError(f'Cannot put {type(value).__name__} into a cursor')


def _json_object_hook(obj: dict):
    if len(obj) == 1:
        tag, value = next(iter(obj.items()))
        if tag in _TAGGED_TYPES:
            if not isinstance(value, str):
                raise ValueError(f'Malformed cursor value: {tag}')
            return _TAGGED_TYPES[tag][2](value)  # ValueError
    return obj


def _load_decimal(value: str) -> Decimal:
    try:
        return Decimal(value)
    except ArithmeticError as e:  # decimal.InvalidOperation
        raise ValueError(f'Malformed decimal: {value!r}') from e


# Tag => (type, dump, load)
# Order matters: `datetime` is a subclass of `date`
_TAGGED_TYPES: dict[str, tuple[type, abc.Callable, abc.Callable]] = {
    '$dt': (datetime, datetime.isoformat, datetime.fromisoformat),
    '$d': (date, date.isoformat, date.fromisoformat),
    '$t': (time, time.isoformat, time.fromisoformat),
    '$dec': (Decimal, str, _load_decimal),
    '$uuid': (UUID, str, UUID),
}
