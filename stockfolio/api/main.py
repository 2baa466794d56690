"""
FastAPI main application for the stockfolio portfolio engine.
"""

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from stockfolio import __version__
from stockfolio.core.exceptions.portfolio import (
    ConcurrentModificationError,
    ConstraintViolationError,
    HoldingNotFoundError,
    PortfolioNotFoundError,
    ValidationError,
)
from stockfolio.core.utils.logging import setup_logging

from .routers import constraints, portfolios


async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    content: dict = {"detail": str(exc)}
    if isinstance(exc, ConstraintViolationError):
        content["errors"] = exc.errors
    return JSONResponse(status_code=422, content=content)


async def _not_found_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def _conflict_handler(request: Request, exc: ConcurrentModificationError) -> JSONResponse:
    logger.warning(f"Conflicting write on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": str(exc), "stored_version": exc.actual_version},
    )


def create_app(debug: bool = False) -> FastAPI:
    """Build the API application.

    Args:
        debug: Enable DEBUG logging

    Returns:
        Configured FastAPI application
    """
    setup_logging(debug)

    app = FastAPI(
        title="Stockfolio API",
        version=__version__,
        description="API for stock portfolio valuation and rebalancing",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",  # Development frontend
            "http://localhost:8080",
        ],
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=[
            "Content-Type",
            "Authorization",
            "Accept",
            "Origin",
            "X-Requested-With",
        ],
    )

    app.add_exception_handler(ValidationError, _validation_error_handler)
    app.add_exception_handler(PortfolioNotFoundError, _not_found_handler)
    app.add_exception_handler(HoldingNotFoundError, _not_found_handler)
    app.add_exception_handler(ConcurrentModificationError, _conflict_handler)

    app.include_router(portfolios.router, prefix="/api/portfolios", tags=["portfolios"])
    app.include_router(constraints.router, prefix="/api/constraints", tags=["constraints"])

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint returning API information."""
        return {"message": "Stockfolio API", "version": __version__, "status": "running"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
