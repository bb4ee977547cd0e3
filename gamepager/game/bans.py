""" Bans: hide games that involve users banned by (or banning) the requester """

from __future__ import annotations

import sqlalchemy as sa

from gamepager.listing import ExclusionSource, Candidate
from gamepager.typing import Identity

from .models import Ban, Member


class BanExclusion(ExclusionSource):
    """ Exclusion data source: games with a member that's on the other side of a ban with the requester

    Makes two queries per batch: the ban list, and the memberships of the candidate games.
    """

    def __init__(self, connection: sa.engine.Connection):
        self.connection = connection

    __slots__ = 'connection',

    def banned_users(self, identity: Identity) -> set[str]:
        """ Get the users who are on the other side of a ban with `identity` """
        stmt = sa.select(Ban.owner_id, Ban.banned_id).where(sa.or_(Ban.owner_id == identity, Ban.banned_id == identity))
        return {
            banned_id if owner_id == identity else owner_id
            for owner_id, banned_id in self.connection.execute(stmt)
        }

    def excluded_keys(self, candidates: list[Candidate], identity: Identity) -> set[tuple]:
        # Nobody banned? Nothing to exclude
        banned = self.banned_users(identity)
        if not banned:
            return set()

        # Find games with banned members
        game_ids = [candidate.key[0] for candidate in candidates]
        stmt = (
            sa.select(Member.game_id)
            .where(Member.game_id.in_(game_ids), Member.user_id.in_(banned))
            .distinct()
        )
        return {(game_id,) for game_id, in self.connection.execute(stmt)}
