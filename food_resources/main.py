import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .core.exceptions import ResourceNotFound
from .routers import resources
from .schemas.common import ErrorEnvelope
from .services.catalog import ResourceCatalog

logger = logging.getLogger(__name__)


def create_app(catalog: Optional[ResourceCatalog] = None) -> FastAPI:
    """Build the API. Without a catalog the dataset at DATA_PATH is loaded on startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logging.basicConfig(level=settings.log_level.upper())
        if getattr(app.state, "catalog", None) is None:
            app.state.catalog = ResourceCatalog.from_json(settings.data_path)
        yield

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.catalog = catalog

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(ResourceNotFound)
    async def resource_not_found(request: Request, exc: ResourceNotFound):
        logger.info("%s", exc)
        return JSONResponse(status_code=404, content=ErrorEnvelope(error="Resource not found").model_dump())

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        # unknown routes and disallowed methods use the same envelope as the API
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorEnvelope(error=str(exc.detail)).model_dump(),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=422, content=ErrorEnvelope(error="Invalid request parameters").model_dump())

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(status_code=500, content=ErrorEnvelope(error="Internal server error").model_dump())

    app.include_router(resources.router)

    @app.get("/")
    def root(request: Request):
        catalog = request.app.state.catalog
        return {
            "name": settings.app_name,
            "env": settings.app_env,
            "resources": len(catalog) if catalog is not None else 0,
            "message": "OK",
        }

    return app


app = create_app()
