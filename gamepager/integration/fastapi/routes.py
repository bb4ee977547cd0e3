from collections import abc

import fastapi
import sqlalchemy as sa

from gamepager.game.game_states import list_game_states, load_game_state
from gamepager.game.kinds import LISTINGS
from gamepager.listing import Listing, ListingKind, ListingRequest, ListingSettings

from .identity import user_from_header
from .params import listing_request_param


def listing_router(get_connection: abc.Callable[..., sa.engine.Connection],
                   *,
                   listings: dict[str, ListingKind] = LISTINGS,
                   get_identity: abc.Callable = user_from_header,
                   settings: ListingSettings = None,
                   ) -> fastapi.APIRouter:
    """ Make a router with a GET route for every listing, and game states

    Args:
        get_connection: Dependency that gives an SqlAlchemy connection
        listings: Listing kinds, by path
        get_identity: Dependency that resolves the requester's user id, or `None`
        settings: Listing settings

    Example:
        app = FastAPI()
        app.include_router(listing_router(get_connection))
        install_exception_handlers(app)
    """
    router = fastapi.APIRouter()

    # Listings
    for path, kind in listings.items():
        router.add_api_route(
            path,
            _listing_endpoint(path, kind, get_connection, get_identity, settings),
            methods=['GET'],
            name=kind.name,
            summary=kind.title,
        )

    # Game states
    @router.get('/games/{game_id}/game-states', name='game-states')
    def game_states(game_id: str,
                    request: fastapi.Request,
                    identity=fastapi.Depends(get_identity),
                    connection=fastapi.Depends(get_connection)):
        return list_game_states(connection, game_id, identity, url=request.url.path).dict()

    @router.get('/games/{game_id}/game-states/{nation}', name='game-state')
    def game_state(game_id: str,
                   nation: str,
                   request: fastapi.Request,
                   identity=fastapi.Depends(get_identity),
                   connection=fastapi.Depends(get_connection)):
        return load_game_state(connection, game_id, nation, identity, url=request.url.path)

    # Done
    return router


def _listing_endpoint(path: str, kind: ListingKind, get_connection: abc.Callable, get_identity: abc.Callable, settings: ListingSettings = None):
    """ Make an endpoint function for a listing """
    make_listing = Listing.prepare(kind, settings)

    def endpoint(listing_request: ListingRequest = fastapi.Depends(listing_request_param(kind, get_identity)),
                 connection=fastapi.Depends(get_connection)):
        return make_listing(connection).fetch(listing_request, url=path).dict()

    return endpoint
