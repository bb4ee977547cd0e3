import base64
import json
from datetime import date, datetime, time
from decimal import Decimal
from uuid import UUID

import pytest

from gamepager import exc
from gamepager.listing.cursor import ScanPosition, encode_cursor, decode_cursor, encode_opaque_cursor, MAX_CURSOR_LENGTH


@pytest.mark.parametrize('cursor', [None, ''])
def test_empty_cursor_starts_from_the_beginning(cursor):
    """ Empty cursor: start of scan, not an error """
    assert decode_cursor(cursor) is None


def test_cursor_is_opaque():
    """ Encoded cursors are prefixed, but don't show their contents """
    position = ScanPosition(cols=('n_members', 'created_at', 'id'), val=(3, datetime(2020, 1, 1, 12, 1), 'A'))
    cursor = encode_cursor(position)

    assert cursor.startswith('keys:')
    assert 'n_members' not in cursor

    # Datetimes survive the trip
    assert decode_cursor(cursor) == position
    assert isinstance(decode_cursor(cursor).val[1], datetime)


@pytest.mark.parametrize('value', [
    date(2020, 1, 1),
    time(12, 30, 15),
    datetime(2020, 1, 1, 12, 30, 15, 123),
    Decimal('10.50'),
    UUID('12345678-1234-5678-1234-567812345678'),
])
def test_cursor_carries_column_values(value):
    """ Values of common column types survive the trip, with their types """
    position = ScanPosition(cols=('value', 'id'), val=(value, 1))
    decoded = decode_cursor(encode_cursor(position))

    assert decoded == position
    assert type(decoded.val[0]) is type(value)


def _b85(data) -> str:
    return base64.b85encode(json.dumps(data).encode()).decode()


@pytest.mark.parametrize('cursor', [
    # Not our format at all
    'garbage',
    'keys:',
    'keys:!!!!~~~~',
    # Some other cursor type
    encode_opaque_cursor('skip', {'skip': 2, 'limit': 2}),
    # Not base85
    'keys:' + base64.b64encode(b'{"cols": [], "val": []}').decode() + '\x00',
    # Well-encoded, but wrong shape
    'keys:' + _b85([1, 2, 3]),
    'keys:' + _b85({'cols': ['id']}),
    'keys:' + _b85({'cols': 'id', 'val': [1]}),
    'keys:' + _b85({'cols': [1], 'val': [1]}),
    # Values that can't be a position
    'keys:' + _b85({'cols': ['id'], 'val': [{'$gt': 1}]}),
    'keys:' + _b85({'cols': ['id'], 'val': [[1, 2]]}),
    'keys:' + _b85({'cols': ['id'], 'val': [{'$dt': 'yesterday'}]}),
    'keys:' + _b85({'cols': ['id'], 'val': [{'$dec': 'ten'}]}),
    'keys:' + _b85({'cols': ['id'], 'val': [{'$uuid': 'not-a-uuid'}]}),
    'keys:' + _b85({'cols': ['id'], 'val': [{'$d': 20200101}]}),
    # Deeply nested
    'keys:' + base64.b85encode(b'[' * 3000).decode(),
    # Too long to even look at
    'keys:' + 'a' * MAX_CURSOR_LENGTH,
])
def test_foreign_cursor_is_invalid(cursor: str):
    """ Cursors not produced by our encoder fail with InvalidCursor """
    with pytest.raises(exc.InvalidCursor):
        decode_cursor(cursor)


def test_invalid_cursor_is_a_client_error():
    with pytest.raises(exc.InvalidCursor) as e:
        decode_cursor('garbage')

    assert e.value.status_code == 400
