"""FastAPI app, CORS, error envelope, and route registration."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException

from fabcast.api.responses import fail, ok
from fabcast.api.routes import overlay, pages, player
from fabcast.api.state import AppState, get_state
from fabcast.core.errors import FabcastError

# uvicorn only configures its own loggers; relay and lookup logs go through root
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(name)s: %(message)s",
)

__all__ = ["app", "create_app", "AppState", "get_state"]

logger = logging.getLogger(__name__)

_HTTP_MESSAGES = {
    404: "Not found",
    405: "Method not allowed",
}


class EmptyPreflightCORSMiddleware(CORSMiddleware):
    """CORS with allow-all preflights answered as an empty 200 (no "OK" body)."""

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        if response.status_code != 200:
            return response
        headers = {
            k: v for k, v in response.headers.items()
            if k not in ("content-length", "content-type")
        }
        return Response(status_code=200, headers=headers)


async def _fabcast_error(request: Request, exc: FabcastError):
    return fail(exc.status_code, exc.message)


async def _http_error(request: Request, exc: StarletteHTTPException):
    message = _HTTP_MESSAGES.get(exc.status_code) or str(exc.detail)
    response = fail(exc.status_code, message)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def _validation_error(request: Request, exc: RequestValidationError):
    return fail(400, "Invalid request parameters.")


async def _unexpected_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return fail(500, "Internal server error.")


def create_app(state: Optional[AppState] = None) -> FastAPI:
    """Build the API around an explicitly owned AppState (built from env when omitted)."""
    app_state = state if state is not None else AppState.from_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Overlay relay using %s store", app_state.store.name)
        yield
        app_state.close()

    app = FastAPI(
        title="Fabcast API",
        description="Overlay state relay and leaderboard lookup for the broadcast lower third",
        lifespan=lifespan,
    )
    app.state.fabcast = app_state

    # Display page and control panel may be opened from anywhere
    app.add_middleware(
        EmptyPreflightCORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.add_exception_handler(FabcastError, _fabcast_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(Exception, _unexpected_error)

    @app.get("/api/health", tags=["health"])
    def health():
        return ok({"status": "ok", "store": app_state.store.name})

    app.include_router(overlay.router, prefix="/api/overlay-state", tags=["overlay"])
    app.include_router(player.router, prefix="/api/player-lookup", tags=["player"])
    app.include_router(pages.router, tags=["pages"])
    return app


app = create_app()
