""" Game states: one per nation per game, whether persisted or not

Every member has exactly one game state per game. Members who never saved theirs
get a default one, and nations stay hidden until the game is mustered.
"""

from __future__ import annotations

from collections import abc
from typing import Any, Optional

import sqlalchemy as sa

from gamepager import exc
from gamepager.listing import ListingPage, Link
from gamepager.typing import SARowDict, Identity

from .models import Game, GameState, Member
from .variants import variant_nations


GAME_STATES_DESC = [
    ['Game states',
     'Each member has exactly one game state per game. '
     'The game state defines game scoped configuration for the member, such as which other members are muted in the chat.'],
    ['Muting',
     "Adding another member nation to the 'muted' list will hide all press from that member.",
     'Note that messages from muted members will still count towards the totals in the channel listings.'],
]


def reconcile(persisted: list[SARowDict],
              expected_keys: abc.Iterable,
              parent_ready: bool,
              *,
              key: str,
              placeholder: abc.Callable[[Any], SARowDict],
              redact: str,
              cleared: Any = '') -> list[SARowDict]:
    """ Complete a set of sub-records: fill in the missing ones, hide what's not ready to be seen

    Args:
        persisted: Records that exist. They come first, in their order
        expected_keys: Every key that must have a record. Missing ones get a placeholder, in this order
        parent_ready: Is the parent entity ready? If not, the `redact` field is cleared on every record
        key: Name of the key field
        placeholder: Factory for a zero-valued record with the given key
        redact: Name of the visibility-sensitive field
        cleared: The value to clear it with

    Returns:
        New records. The input ones are not modified
    """
    records = [dict(record) for record in persisted]

    # Fill in the missing ones
    present = {record[key] for record in records}
    records.extend(
        placeholder(expected_key)
        for expected_key in expected_keys
        if expected_key not in present
    )

    # Hide what's not ready
    if not parent_ready:
        for record in records:
            record[redact] = cleared

    # Done
    return records


def list_game_states(connection: sa.engine.Connection, game_id: str, identity: Optional[Identity], *, url: str = '') -> ListingPage:
    """ List game states of every nation in the game

    Raises:
        exc.Unauthorized: no identity
        exc.NotFound: no such game
    """
    game = _load_game(connection, game_id, identity)

    # Load persisted ones
    stmt = sa.select(GameState.__table__).where(GameState.game_id == game_id).order_by(GameState.nation)
    persisted = [dict(row) for row in connection.execute(stmt).mappings()]

    # Reconcile
    states = reconcile(
        persisted,
        variant_nations(game['variant']),
        game['mustered'],
        key='nation',
        placeholder=lambda nation: game_state_placeholder(game_id, nation),
        redact='nation',
    )

    # The requester's own game state links to itself
    own_nation = _member_nation(connection, game, identity)
    for state in states:
        if own_nation and state['nation'] == own_nation:
            state['links'] = [Link('self', f'{url}/{own_nation}').dict()]

    # Done
    return ListingPage(
        name='game-states',
        desc=GAME_STATES_DESC,
        items=states,
        links=[Link('self', url)],
        limit=len(states),
    )


def load_game_state(connection: sa.engine.Connection, game_id: str, nation: str, identity: Optional[Identity], *, url: str = '') -> SARowDict:
    """ Load the game state of one nation: persisted, or a default one

    Raises:
        exc.Unauthorized: no identity
        exc.NotFound: no such game
    """
    game = _load_game(connection, game_id, identity)

    stmt = sa.select(GameState.__table__).where(GameState.game_id == game_id, GameState.nation == nation)
    row = connection.execute(stmt).mappings().first()

    states = reconcile(
        [dict(row)] if row is not None else [],
        [nation],
        game['mustered'],
        key='nation',
        placeholder=lambda nation: game_state_placeholder(game_id, nation),
        redact='nation',
    )

    state = states[0]
    if state['nation'] and state['nation'] == _member_nation(connection, game, identity):
        state['links'] = [Link('self', url).dict()]
    return state


def game_state_placeholder(game_id: str, nation: str) -> SARowDict:
    """ A default game state: nothing muted """
    return {'game_id': game_id, 'nation': nation, 'muted': []}


def _load_game(connection: sa.engine.Connection, game_id: str, identity: Optional[Identity]) -> SARowDict:
    """ Load the parent game, or fail """
    if identity is None:
        raise exc.Unauthorized('game-states')

    row = connection.execute(sa.select(Game.__table__).where(Game.id == game_id)).mappings().first()
    if row is None:
        raise exc.NotFound(f'Game not found: {game_id}')
    return dict(row)


def _member_nation(connection: sa.engine.Connection, game: SARowDict, identity: Identity) -> str:
    """ Get the nation the requester plays in the game. Empty until the game is mustered """
    if not game['mustered']:
        return ''

    stmt = sa.select(Member.nation).where(Member.game_id == game['id'], Member.user_id == identity)
    return connection.execute(stmt).scalar() or ''
