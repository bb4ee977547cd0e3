import sqlalchemy as sa
import sqlalchemy.orm

from gamepager.typing import Identity, SACondition


Base = sa.orm.declarative_base()


class Game(Base):
    """ A game: a match between members """
    __tablename__ = 'games'

    id = sa.Column(sa.String, primary_key=True)
    variant = sa.Column(sa.String, nullable=False)
    description = sa.Column(sa.String, nullable=False, default='')
    created_at = sa.Column(sa.DateTime, nullable=False)

    # The number of members
    n_members = sa.Column(sa.Integer, nullable=False, default=0)

    # Lifecycle flags
    closed = sa.Column(sa.Boolean, nullable=False, default=False)
    started = sa.Column(sa.Boolean, nullable=False, default=False)
    finished = sa.Column(sa.Boolean, nullable=False, default=False)

    # Are nations assigned and visible?
    mustered = sa.Column(sa.Boolean, nullable=False, default=False)


class Member(Base):
    """ A user's membership in a game """
    __tablename__ = 'members'

    game_id = sa.Column(sa.ForeignKey(Game.id), primary_key=True)
    user_id = sa.Column(sa.String, primary_key=True)
    nation = sa.Column(sa.String, nullable=False, default='')


class Ban(Base):
    """ A ban between two users: they never see each other's games """
    __tablename__ = 'bans'

    id = sa.Column(sa.Integer, primary_key=True)
    owner_id = sa.Column(sa.String, nullable=False)
    banned_id = sa.Column(sa.String, nullable=False)
    created_at = sa.Column(sa.DateTime, nullable=False)


class UserStats(Base):
    """ Per-user statistics: leaderboard rows """
    __tablename__ = 'user_stats'

    user_id = sa.Column(sa.String, primary_key=True)
    practical_rating = sa.Column(sa.Float, nullable=False, default=0.0)
    reliability = sa.Column(sa.Float, nullable=False, default=0.0)
    hated = sa.Column(sa.Float, nullable=False, default=0.0)
    hater = sa.Column(sa.Float, nullable=False, default=0.0)
    quickness = sa.Column(sa.Float, nullable=False, default=0.0)


class GameState(Base):
    """ Game-scoped configuration of a member: one per nation per game """
    __tablename__ = 'game_states'

    game_id = sa.Column(sa.ForeignKey(Game.id), primary_key=True)
    nation = sa.Column(sa.String, primary_key=True)

    # Nations whose press is hidden
    muted = sa.Column(sa.JSON, nullable=False, default=list)


def game_membership(user_id: Identity) -> SACondition:
    """ Ownership filter: games the user is a member of """
    return Game.id.in_(sa.select(Member.game_id).where(Member.user_id == user_id))


def ban_participation(user_id: Identity) -> SACondition:
    """ Ownership filter: bans the user is on either side of """
    return sa.or_(Ban.owner_id == user_id, Ban.banned_id == user_id)
