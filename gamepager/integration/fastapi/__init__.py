""" FastAPI integration: listing routes, request parameters, error responses """

from .identity import user_from_header
from .params import listing_request_param
from .routes import listing_router
from .errors import install_exception_handlers
