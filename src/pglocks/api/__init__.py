"""
pglocks API Module
FastAPI application serving the lock reference
"""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pglocks._version import __version__
from pglocks.api.routes import ReferenceServices, router
from pglocks.catalog.catalog import ReferenceCatalog
from pglocks.catalog.loader import load_catalog
from pglocks.core.config import Settings
from pglocks.core.exceptions import (
    ErrorResponse,
    ErrorType,
    NotFoundError,
    PgLocksError,
    from_exception,
    internal_error,
    not_found_error,
)
from pglocks.core.logging import logger
from pglocks.engine.relationships import RelationshipEngine


def create_app(
    catalog: Optional[ReferenceCatalog] = None, settings: Optional[Settings] = None
) -> FastAPI:
    """
    Build the application around one catalog.

    The catalog is loaded here when not given, so a broken reference table
    stops the server before it accepts requests.

    Args:
        catalog: Prebuilt catalog
        settings: Settings used to locate the data file

    Returns:
        FastAPI: Configured application instance
    """
    if catalog is None:
        settings = settings or Settings()
        catalog = load_catalog(settings.data_file)

    app = FastAPI(
        title="pglocks API",
        description="PostgreSQL lock modes, the commands that acquire them and their conflicts",
        version=__version__,
    )

    # Read-only public data
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.state.services = ReferenceServices.from_engine(RelationshipEngine(catalog))
    app.include_router(router)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        body = not_found_error(
            exc.context.get("resource", "item"), exc.context.get("identifier", request.url.path)
        )
        return JSONResponse(status_code=404, content=body.model_dump(mode="json"))

    @app.exception_handler(PgLocksError)
    async def pglocks_error_handler(request: Request, exc: PgLocksError) -> JSONResponse:
        logger.error("Request failed", path=request.url.path, error=exc.to_dict())
        return JSONResponse(status_code=500, content=from_exception(exc).model_dump(mode="json"))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        body = ErrorResponse(
            error_type=ErrorType.VALIDATION,
            message="Invalid request parameters",
            context={"errors": jsonable_encoder(exc.errors())},
            code="validation_error",
        )
        return JSONResponse(status_code=422, content=body.model_dump(mode="json"))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        body = internal_error(context={"path": request.url.path, "type": type(exc).__name__})
        logger.error(
            "Unhandled error", include_trace=True, path=request.url.path, error_id=body.error_id
        )
        return JSONResponse(status_code=500, content=body.model_dump(mode="json"))

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {"message": "pglocks API is running"}

    logger.info("API initialized", commands=len(catalog.commands), locks=len(catalog.locks))
    return app


__all__ = ["create_app"]
