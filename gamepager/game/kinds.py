""" Listing kinds: games, leaderboards, bans """

from gamepager.listing import ListingKind

from .bans import BanExclusion
from .models import Game, UserStats, Ban, game_membership, ban_participation


# region Games

def games_listing(name: str, desc: list[list[str]], *, filter: dict, sort: list[str], private: bool = False) -> ListingKind:
    """ Make a listing of games: filterable by variant, with banned users' games hidden """
    return ListingKind(
        name=name,
        desc=desc,
        Model=Game,
        filter=filter,
        sort=sort,
        private=private,
        ownership=game_membership if private else None,
        filter_param='variant',
        filter_field='variant',
        exclusion=BanExclusion,
    )


open_games = games_listing(
    'open-games',
    [['Open games', 'Open games, sorted with fullest and oldest first.']],
    filter={'closed': False},
    sort=['n_members-', 'created_at'],
)

started_games = games_listing(
    'started-games',
    [['Started games', 'Started games, sorted with oldest first.']],
    filter={'started': True, 'finished': False},
    sort=['created_at'],
)

finished_games = games_listing(
    'finished-games',
    [['Finished games', 'Finished games, sorted with newest first.']],
    filter={'finished': True},
    sort=['created_at-'],
)

my_staging_games = games_listing(
    'my-staging-games',
    [['My staging games', "Unstarted games I'm a member of, sorted with fullest and oldest first."]],
    filter={'started': False},
    sort=['n_members-', 'created_at'],
    private=True,
)

my_started_games = games_listing(
    'my-started-games',
    [['My started games', "Started games I'm a member of, sorted with oldest first."]],
    filter={'started': True, 'finished': False},
    sort=['created_at'],
    private=True,
)

my_finished_games = games_listing(
    'my-finished-games',
    [['My finished games', "Finished games I'm a member of, sorted with newest first."]],
    filter={'finished': True},
    sort=['created_at-'],
    private=True,
)

# endregion


# region Leaderboards

def leaderboard_listing(name: str, desc: list[list[str]], *, sort: list[str]) -> ListingKind:
    """ Make a leaderboard: user stats, nothing to exclude """
    return ListingKind(
        name=name,
        desc=desc,
        Model=UserStats,
        sort=sort,
        requires_identity=True,
    )


top_rated_players = leaderboard_listing(
    'top-rated-players',
    [['Top rated players', 'Players sorted by practical rating (lowest bound of their rating: rating - 2 * deviation)']],
    sort=['practical_rating-'],
)

top_reliable_players = leaderboard_listing(
    'top-reliable-players',
    [['Top reliable players', 'Players sorted by reliability']],
    sort=['reliability-'],
)

top_hated_players = leaderboard_listing(
    'top-hated-players',
    [['Top hated players', 'Players sorted by how often they are banned']],
    sort=['hated-'],
)

top_hater_players = leaderboard_listing(
    'top-hater-players',
    [['Top hater players', 'Players sorted by how often they ban others']],
    sort=['hater-'],
)

top_quick_players = leaderboard_listing(
    'top-quick-players',
    [['Top quick players', 'Players sorted by quickness']],
    sort=['quickness-'],
)

# endregion


my_bans = ListingKind(
    name='my-bans',
    desc=[['My bans', 'Bans I am part of, sorted with newest first.',
           'Users on either side of a ban never see games that the other one is a member of.']],
    Model=Ban,
    sort=['created_at-'],
    private=True,
    ownership=ban_participation,
)


# All listings, by URL path
LISTINGS: dict[str, ListingKind] = {
    '/games/open': open_games,
    '/games/started': started_games,
    '/games/finished': finished_games,
    '/games/my/staging': my_staging_games,
    '/games/my/started': my_started_games,
    '/games/my/finished': my_finished_games,
    '/users/top-rated': top_rated_players,
    '/users/top-reliable': top_reliable_players,
    '/users/top-hated': top_hated_players,
    '/users/top-hater': top_hater_players,
    '/users/top-quick': top_quick_players,
    '/bans/my': my_bans,
}
