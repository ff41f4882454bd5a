"""
FastAPI application exposing the availability matcher over HTTP.
"""

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import AppConfig
from ..services.request_handler import AvailabilityRequestHandler

# Every method is routed to the handler so it can answer 405 and preflights itself
ROUTED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(config: AppConfig | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Application configuration; defaults are used when omitted

    Returns:
        Configured FastAPI instance
    """
    config = config or AppConfig()
    handler = AvailabilityRequestHandler.from_config(config)

    app = FastAPI(
        title="slotmatcher",
        version=__version__,
        description="Rank employee availability against a requested booking time",
    )

    @app.api_route("/api", methods=ROUTED_METHODS)
    async def match_availability(request: Request) -> Response:
        body = await request.body()
        result = handler.handle(request.method, body)

        if result.payload is None:
            return Response(status_code=result.status_code, headers=result.headers)

        return JSONResponse(
            content=result.payload,
            status_code=result.status_code,
            headers=result.headers,
        )

    @app.get("/")
    async def root():
        return {"message": "Welcome to slotmatcher. POST match requests to /api."}

    return app
