import logging

import fastapi
from fastapi.responses import JSONResponse

from gamepager import exc


logger = logging.getLogger(__name__)


def install_exception_handlers(app: fastapi.FastAPI):
    """ Render gamepager errors as JSON responses with a proper status code

    * Unauthorized: 401
    * InvalidCursor: 400
    * NotFound: 404
    * BackendError: 500
    """
    @app.exception_handler(exc.BaseGamepagerException)
    async def gamepager_error_handler(request: fastapi.Request, e: exc.BaseGamepagerException) -> JSONResponse:
        if e.status_code >= 500:
            logger.exception(f'Listing failed: {request.url.path}', exc_info=e)

        return JSONResponse({'error': str(e)}, status_code=e.status_code)
