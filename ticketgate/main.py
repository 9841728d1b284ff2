import logging
from contextlib import asynccontextmanager
from urllib.parse import urlencode

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse, Response
from starlette.middleware.sessions import SessionMiddleware

from .auth import OIDCClient
from .config import Settings
from .db import build_engine, build_session_factory
from .errors import LoginRequired, TicketGateError, ValidationError
from .routes import api_router

logger = logging.getLogger(__name__)

JSON_ERROR_TAG = "api"


def _wants_json(request: Request) -> bool:
    route = request.scope.get("route")
    return JSON_ERROR_TAG in (getattr(route, "tags", None) or [])


async def ticket_gate_error_handler(request: Request, exc: TicketGateError) -> Response:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    if _wants_json(request):
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)
    body = exc.message if exc.status_code < 500 else "Internal Server Error"
    return PlainTextResponse(body, status_code=exc.status_code)


async def request_body_error_handler(
    request: Request, exc: RequestValidationError
) -> Response:
    if not _wants_json(request):
        return await request_validation_exception_handler(request, exc)
    return await ticket_gate_error_handler(request, _body_error(exc))


def _body_error(exc: RequestValidationError) -> ValidationError:
    for error in exc.errors():
        if error.get("type") == "json_invalid":
            return ValidationError("Request body must be valid JSON.")
        if tuple(error.get("loc", ()))[-1:] == ("vatin",):
            return ValidationError("VATIN must have exactly 11 digits.")
    return ValidationError("All fields are required.")


async def login_required_handler(request: Request, exc: LoginRequired) -> Response:
    query = urlencode({"returnTo": exc.return_to})
    return RedirectResponse(url=f"/login?{query}", status_code=302)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    engine = build_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Serving tickets at %s", settings.base_url)
        yield
        engine.dispose()

    app = FastAPI(title="ticketgate", lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.oidc = OIDCClient(settings)

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie="ticketgate_session",
        same_site="lax",
        https_only=settings.base_url.startswith("https://"),
    )
    app.add_exception_handler(TicketGateError, ticket_gate_error_handler)
    app.add_exception_handler(LoginRequired, login_required_handler)
    app.add_exception_handler(RequestValidationError, request_body_error_handler)
    app.include_router(api_router)

    @app.get("/health", tags=["health"])
    def health_check() -> dict:
        return {"status": "ok"}

    return app
