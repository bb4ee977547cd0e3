from datetime import date
from decimal import Decimal
from urllib.parse import urlsplit, parse_qs

import pytest
import sqlalchemy as sa
import sqlalchemy.orm

from gamepager import exc
from gamepager.game import kinds
from gamepager.game.models import Game
from gamepager.listing import Listing, ListingKind, ListingRequest, ListingSettings, ListingPage
from gamepager.listing.cursor import ScanPosition, encode_cursor
from gamepager.testing import QueryCounter, created_tables, insert

from .util.data import insert_lobby, insert_leaderboard, game
from .util.fakes import ids


def fetch(connection: sa.engine.Connection, kind, settings: ListingSettings = None, **request) -> ListingPage:
    return Listing.for_connection(kind, connection, settings).fetch(ListingRequest(**request), url='/test')


def fetch_all(connection: sa.engine.Connection, kind, **request) -> list[list[str]]:
    """ Fetch every page; get the ids """
    pages = []
    cursor = None
    while True:
        page = fetch(connection, kind, cursor=cursor, **request)
        pages.append([item['id'] for item in page.items])
        cursor = page.cursor
        if cursor is None:
            return pages


def test_ban_exclusion_scenario(connection: sa.engine.Connection):
    """ Games A..E; B and D have a member who has banned the viewer """
    insert_lobby(connection)

    # Page 1
    page = fetch(connection, kinds.open_games, identity='viewer', limit=2)
    assert ids(page.items) == ['A', 'C']
    assert page.cursor is not None
    next_url = urlsplit(page.link('next').url)
    assert next_url.path == '/test'
    assert parse_qs(next_url.query) == {'limit': ['2'], 'cursor': [page.cursor]}

    # Page 2: the last one
    page = fetch(connection, kinds.open_games, identity='viewer', limit=2, cursor=page.cursor)
    assert ids(page.items) == ['E']
    assert page.cursor is None
    assert page.link('next') is None


def test_ban_exclusion_works_both_ways(connection: sa.engine.Connection):
    """ The villain doesn't see the viewer's games either """
    insert_lobby(connection)

    assert fetch_all(connection, kinds.open_games, identity='villain', limit=10) == [['B', 'C', 'D']]


def test_anonymous_public_listing(connection: sa.engine.Connection):
    """ Anonymous: nobody to exclude for. Mixed-direction ordering holds across pages """
    insert_lobby(connection)

    assert fetch_all(connection, kinds.open_games, limit=2) == [['A', 'B'], ['C', 'D'], ['E']]
    assert fetch_all(connection, kinds.open_games, limit=1) == [['A'], ['B'], ['C'], ['D'], ['E']]


def test_exact_fit_page(connection: sa.engine.Connection):
    """ The page has everything that's left: no cursor """
    insert_lobby(connection)

    page = fetch(connection, kinds.open_games, limit=5)
    assert len(page.items) == 5
    assert page.cursor is None


def test_variant_filter(connection: sa.engine.Connection):
    insert_lobby(connection)

    page = fetch(connection, kinds.open_games, identity='viewer', filter_value='Hundred')
    assert ids(page.items) == ['E']

    # Links keep the filter
    assert page.link('self').url == '/test?variant=Hundred&limit=64'

    # Unknown variant: nothing matches
    page = fetch(connection, kinds.open_games, identity='viewer', filter_value='No Such Variant')
    assert page.items == []
    assert page.cursor is None


def test_private_listing(connection: sa.engine.Connection):
    """ Private listings only show the requester's games """
    insert_lobby(connection)

    assert fetch_all(connection, kinds.my_staging_games, identity='viewer', limit=1) == [['A'], ['E']]
    assert fetch_all(connection, kinds.my_staging_games, identity='alice', limit=10) == [['A', 'C']]
    assert fetch_all(connection, kinds.my_staging_games, identity='nobody') == [[]]


def test_private_listing_unauthorized(engine: sa.engine.Engine, connection: sa.engine.Connection):
    """ No identity: fails before the backend is touched """
    insert_lobby(connection)

    with QueryCounter(engine) as counter:
        with pytest.raises(exc.Unauthorized):
            fetch(connection, kinds.my_staging_games, identity=None)

    assert counter.n == 0


def test_invalid_cursor(engine: sa.engine.Engine, connection: sa.engine.Connection):
    """ Bad cursors fail before the backend is touched """
    insert_lobby(connection)
    insert_leaderboard(connection)

    # A cursor from a leaderboard
    leaderboard_cursor = fetch(connection, kinds.top_rated_players, identity='viewer', limit=1).cursor
    assert leaderboard_cursor is not None

    with QueryCounter(engine) as counter:
        with pytest.raises(exc.InvalidCursor):
            fetch(connection, kinds.open_games, cursor=leaderboard_cursor)

        with pytest.raises(exc.InvalidCursor):
            fetch(connection, kinds.open_games, cursor='keys:garbage')

        # Right columns, wrong value types
        forged = encode_cursor(ScanPosition(cols=('n_members', 'created_at', 'id'), val=('3', 'A', 'A')))
        with pytest.raises(exc.InvalidCursor):
            fetch(connection, kinds.open_games, cursor=forged)

    assert counter.n == 0


def test_finished_games_newest_first(connection: sa.engine.Connection):
    """ Descending by time; games with the same timestamp are ordered by id """
    insert(connection, Game,
        game('F1', minute=1, started=True, finished=True),
        game('F2', minute=5, started=True, finished=True),
        game('F3', minute=5, started=True, finished=True),
        game('F4', minute=3, started=True, finished=True),
        game('S1', minute=4, started=True),
    )

    assert fetch_all(connection, kinds.finished_games, limit=1) == [['F2'], ['F3'], ['F4'], ['F1']]
    assert fetch_all(connection, kinds.started_games) == [['S1']]


def test_leaderboard(connection: sa.engine.Connection):
    """ Leaderboards: no exclusions, identity required """
    insert_leaderboard(connection)

    pages = []
    cursor = None
    while True:
        page = fetch(connection, kinds.top_rated_players, identity='viewer', limit=3, cursor=cursor)
        pages.append([item['user_id'] for item in page.items])
        cursor = page.cursor
        if cursor is None:
            break

    assert pages == [['u1', 'u2', 'u3'], ['u4']]

    with pytest.raises(exc.Unauthorized):
        fetch(connection, kinds.top_rated_players, identity=None)


def test_my_bans(connection: sa.engine.Connection):
    insert_lobby(connection)

    page = fetch(connection, kinds.my_bans, identity='viewer')
    assert [(item['owner_id'], item['banned_id']) for item in page.items] == [('villain', 'viewer')]

    page = fetch(connection, kinds.my_bans, identity='alice')
    assert page.items == []


@pytest.mark.parametrize(('limit', 'expected_count'), [
    (None, 3),
    (0, 3),
    (-1, 3),
    (2, 2),
    (3, 3),
    (100, 3),
])
def test_limit_clamping(connection: sa.engine.Connection, limit, expected_count: int):
    """ Limits are clamped to the max, never rejected """
    insert_lobby(connection)

    page = fetch(connection, kinds.open_games, ListingSettings(max_limit=3), limit=limit)
    assert len(page.items) == expected_count
    assert page.limit == expected_count


def test_envelope(connection: sa.engine.Connection):
    insert_lobby(connection)

    page = fetch(connection, kinds.open_games, limit=4)
    envelope = page.dict()

    assert envelope['name'] == 'open-games'
    assert envelope['desc'] == [['Open games', 'Open games, sorted with fullest and oldest first.']]
    assert [item['id'] for item in envelope['items']] == ['A', 'B', 'C', 'D']
    assert [link['rel'] for link in envelope['links']] == ['self', 'next']
    assert envelope['cursor'] == page.cursor
    assert envelope['limit'] == 4


def test_date_and_decimal_sorting(connection: sa.engine.Connection):
    """ Listings sorted by dates and decimals paginate like any other """
    class Price(sa.orm.declarative_base()):
        __tablename__ = 'prices'
        id = sa.Column(sa.Integer, primary_key=True)
        day = sa.Column(sa.Date, nullable=False)
        price = sa.Column(sa.Numeric(10, 2), nullable=False)

    with created_tables(connection, Price.metadata):
        insert(connection, Price,
            dict(id=1, day=date(2020, 1, 3), price=Decimal('3.50')),
            dict(id=2, day=date(2020, 1, 1), price=Decimal('1.25')),
            dict(id=3, day=date(2020, 1, 2), price=Decimal('2.00')),
        )

        by_day = ListingKind(name='prices-by-day', desc=[], Model=Price, sort=['day'])
        assert fetch_all(connection, by_day, limit=1) == [[2], [3], [1]]

        by_price = ListingKind(name='prices-by-price', desc=[], Model=Price, sort=['price-'])
        assert fetch_all(connection, by_price, limit=2) == [[1, 3], [2]]
