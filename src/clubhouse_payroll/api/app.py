"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from clubhouse_payroll import __version__
from clubhouse_payroll.api.routes import credits_router, health_router, payroll_router
from clubhouse_payroll.calculators import InvalidReportInputError, MealBreakError, RateCache
from clubhouse_payroll.database import dispose_db, init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    init_db()
    yield
    # Shutdown
    await dispose_db()


def create_app(rate_cache: RateCache | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    One ``RateCache`` lives for the lifetime of the app and is shared by
    every request.
    """
    app = FastAPI(
        title="Clubhouse Payroll API",
        description="Payroll export and position credits",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.rate_cache = rate_cache if rate_cache is not None else RateCache()

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(InvalidReportInputError)
    @app.exception_handler(MealBreakError)
    async def invalid_input_handler(request: Request, exc: ValueError) -> JSONResponse:
        """Reject out-of-range report parameters."""
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc), "code": "INVALID_INPUT"},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            },
        )

    # Include routers
    app.include_router(health_router)
    app.include_router(payroll_router, prefix="/api/v1")
    app.include_router(credits_router, prefix="/api/v1")

    return app


# Default app instance for uvicorn
app = create_app()
