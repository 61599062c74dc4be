"""
Purpose:
- FastAPI application factory and router mount.
- CORS open to every origin, GET/POST only.
- Uniform JSON errors: {"error": "..."} for domain errors and anything unhandled,
  404 for anything unrouted.
- Logging is configured before the module-level app is built, so
  `uvicorn img_alt_api.main:app` and the `img-alt-api` console script log the same way.
"""

import logging
from typing import Optional
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.errors import MSG_NOT_FOUND, DescriptionError
from .core.logs import setup_logging
from .core.settings import Settings, get_settings
from .api.describe import router as describe_router
from .vlm.describer import DescriptionService
from .vlm.provider import VisionProvider
from .vlm.schema import ApiError

logger = logging.getLogger(__name__)

def error_response(message: str, status_code: int, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(ApiError(error=message).model_dump(), status_code=status_code, headers=headers)

async def description_error_handler(request: Request, exc: DescriptionError):
    return error_response(exc.message, exc.status_code)

async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # unknown path and unknown method on a known path look the same to callers
    if exc.status_code in (404, 405):
        return error_response(MSG_NOT_FOUND, 404)
    return error_response(str(exc.detail), exc.status_code, headers=exc.headers)

async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(str(exc) or exc.__class__.__name__, 500)

def create_app(settings: Optional[Settings] = None, provider: Optional[VisionProvider] = None) -> FastAPI:
    settings = settings or get_settings()
    provider = provider or VisionProvider(settings)

    app = FastAPI(title="img-alt-api", version="0.1.0", docs_url=None, redoc_url=None, openapi_url=None)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_exception_handler(DescriptionError, description_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.state.settings = settings
    app.state.description_service = DescriptionService(provider, upload_limit=settings.upload_limit)
    app.include_router(describe_router)

    logger.info(
        "img-alt-api ready: model=%s endpoint=%s upload_limit=%d",
        settings.deepseek_model, settings.completions_url, settings.upload_limit,
    )
    return app

def serve() -> None:
    settings = get_settings()
    uvicorn.run("img_alt_api.main:app", host=settings.host, port=settings.port, log_config=None)

setup_logging(get_settings().log_level)
app = create_app()
