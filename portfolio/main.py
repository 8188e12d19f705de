"""FastAPI application for the portfolio site."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.exceptions import HTTPException

from portfolio import __version__
from portfolio.api import feed as feed_api
from portfolio.api import health
from portfolio.config import Settings, load_settings
from portfolio.content import ContentIndex, MalformedDocumentError, load_content_index
from portfolio.metrics import publish_app_info, record_http_request
from portfolio.site import pages
from portfolio.site.profile import SiteProfile, load_profile
from portfolio.version_info import describe_build

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


async def _http_exception_handler(request: Request, exc: HTTPException) -> Response:
    if exc.status_code == 405:
        allowed = sorted(method.strip() for method in (exc.headers or {}).get("Allow", "").split(",") if method.strip())
        return JSONResponse(
            status_code=405,
            content={"error": "method_not_allowed", "detail": f"use one of: {allowed}"},
            headers=exc.headers,
        )
    if exc.status_code == 404 and not request.url.path.startswith("/api/"):
        return pages.render_not_found(request)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=exc.headers)


async def _malformed_document_handler(request: Request, exc: MalformedDocumentError) -> JSONResponse:
    logger.error(
        {
            "event": "malformed_document",
            "field": exc.field,
            "source": str(exc.source) if exc.source else None,
            "path": request.url.path,
        }
    )
    return JSONResponse(status_code=500, content={"error": "malformed_document", "detail": str(exc)})


def create_app(
    settings: Optional[Settings] = None,
    *,
    content_index: Optional[ContentIndex] = None,
    profile: Optional[SiteProfile] = None,
) -> FastAPI:
    """Build the application around one immutable content snapshot.

    ``content_index`` and ``profile`` default to what ``settings.content_dir``
    holds; loader errors propagate so a broken content tree fails at startup.
    """

    settings = settings or load_settings()
    application = FastAPI(title="Portfolio", version=__version__)
    application.state.settings = settings
    application.state.content_index = (
        content_index if content_index is not None else load_content_index(settings.posts_dir)
    )
    application.state.profile = profile if profile is not None else load_profile(settings.site_file)

    application.state.build_info = describe_build(application.state.content_index, stamp_path=settings.build_stamp)
    publish_app_info(application.state.build_info.as_dict())

    @application.middleware("http")
    async def count_requests(request: Request, call_next):
        response = await call_next(request)
        route = request.scope.get("route")
        record_http_request(getattr(route, "path", "unmatched"))
        return response

    @application.get("/metrics", include_in_schema=False)
    async def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    application.add_exception_handler(HTTPException, _http_exception_handler)
    application.add_exception_handler(MalformedDocumentError, _malformed_document_handler)

    application.include_router(health.router)
    application.include_router(feed_api.router)
    # The post route matches any path, so it goes last.
    application.include_router(pages.router)

    logger.info(
        {
            "event": "app_created",
            "environment": settings.environment,
            "documents": len(application.state.content_index),
        }
    )
    return application


def build_default_app() -> FastAPI:
    settings = load_settings()
    configure_logging(settings.log_level)
    return create_app(settings)


app = build_default_app()
