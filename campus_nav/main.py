# campus_nav/main.py

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from campus_nav.api.v1 import routes_health, routes_locations, routes_routing, routes_sessions
from campus_nav.core.config import settings
from campus_nav.core.errors import (
    CampusNavError,
    EmptyGraphError,
    LocationNotFoundError,
    SessionNotFoundError,
)
from campus_nav.core.logger import logger

_ERROR_STATUS = {
    LocationNotFoundError: status.HTTP_404_NOT_FOUND,
    SessionNotFoundError: status.HTTP_404_NOT_FOUND,
    EmptyGraphError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


async def campus_nav_error_handler(request: Request, exc: CampusNavError) -> JSONResponse:
    """
    Turn engine errors into JSON error responses.
    """
    status_code = _ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error("{} {} failed: {}", request.method, request.url.path, exc)
    else:
        logger.warning("{} {} rejected: {}", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Walking routes, rerouting and navigation sessions on a campus graph.",
    )

    # Routers
    app.include_router(routes_health.router, prefix="", tags=["health"])
    app.include_router(routes_locations.router, prefix="", tags=["locations"])
    app.include_router(routes_routing.router, prefix="", tags=["routing"])
    app.include_router(routes_sessions.router, prefix="", tags=["navigation"])

    app.add_exception_handler(CampusNavError, campus_nav_error_handler)

    return app


app = create_app()
