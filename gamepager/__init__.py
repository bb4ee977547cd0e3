from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version('gamepager')
except PackageNotFoundError:
    __version__ = '0.0.0'

from .listing import Listing, ListingKind, ListingRequest, ListingPage, ListingSettings
from . import exc
