class BaseGamepagerException(Exception):
    """ Base for all gamepager errors

    Every error knows which HTTP status it maps to at the boundary layer.
    """
    status_code: int = 500


class Unauthorized(BaseGamepagerException):
    """ The listing requires an identity, but the request has none

    Reported before the backend is ever touched
    """
    status_code = 401

    def __init__(self, listing_name: str):
        self.listing_name = listing_name
        super().__init__(f'Listing "{listing_name}" requires an authenticated user')


class InvalidCursor(BaseGamepagerException):
    """ Invalid cursor provided by the User

    Reported when the cursor string was not produced by our encoder, or belongs to a differently sorted listing
    """
    status_code = 400

    def __init__(self, err: str):
        super().__init__(f'Invalid cursor: {err}')


class NotFound(BaseGamepagerException):
    """ The parent entity of a listing does not exist """
    status_code = 404


class BackendError(BaseGamepagerException):
    """ The query backend or an exclusion lookup failed

    The whole listing is aborted: no partial page is ever returned.
    The original error is available as `__cause__`.
    """
    status_code = 500


class InvalidColumnError(BaseGamepagerException):
    """ A listing kind mentioned an invalid column name

    Reported when a column mentioned by name is not found on the SqlAlchemy model.
    This is a programming error.
    """

    def __init__(self, model: str, column_name: str, where: str):
        self.model = model
        self.column_name = column_name
        self.where = where

        super().__init__(f'Invalid column "{column_name}" for "{model}" specified in {where}')


class ListingKindError(BaseGamepagerException):
    """ A listing kind is misconfigured (programming error) """
