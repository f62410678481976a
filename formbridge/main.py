"""
formbridge HTTP service.

Serves the Questionnaire and QuestionnaireResponse converters over a small
REST API. Run with the ``formbridge`` console script.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from formbridge import __version__
from formbridge.config.logging import configure_logging, get_logger, set_request_id
from formbridge.config.settings import Settings, get_settings
from formbridge.middleware import RequestSizeLimitMiddleware
from formbridge.routers import forms_router, health_router

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def _setup_logging(settings: Settings) -> None:
    configure_logging(level=settings.log_level, json_format=settings.log_json)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    _setup_logging(settings)
    logger.info(
        "formbridge started",
        version=__version__,
        default_entry_mode=settings.default_entry_mode.value,
        expression_language=settings.expression_language,
    )
    yield
    logger.info("formbridge stopped")


async def tag_request(request: Request, call_next):
    """Propagate or assign a correlation ID and echo it on the response."""
    request_id = set_request_id(request.headers.get(REQUEST_ID_HEADER))
    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title="formbridge",
        description="FHIR Questionnaire to form definition conversion, and answers back to QuestionnaireResponse",
        version=__version__,
        lifespan=lifespan,
    )

    # Wildcard origins cannot be combined with credentials
    wildcard = settings.cors_origins == "*"
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if wildcard else settings.cors_origins.split(","),
        allow_credentials=not wildcard,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestSizeLimitMiddleware, max_body_size=settings.max_request_body_size)
    app.middleware("http")(tag_request)

    for router in (health_router, forms_router):
        app.include_router(router)
    return app


app = create_app()


def run():
    """Console entry point: serve ``formbridge.main:app`` with uvicorn."""
    settings = get_settings()
    _setup_logging(settings)
    uvicorn.run(
        "formbridge.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
