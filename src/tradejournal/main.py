"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tradejournal.api.routers import analysis_router, market_router, trades_router
from tradejournal.app_context import get_app_context
from tradejournal.config.logging_config import setup_logging
from tradejournal.config.settings import get_settings
from tradejournal.core.exceptions import AppError, NotFoundError, StructuralParseError


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    context = get_app_context()
    setup_logging(context.settings)
    context.initialize()
    if context.settings.price_sync_enabled:
        context.start_sync()
    yield
    # Shutdown: stop the scheduler before anything else is torn down
    await context.close()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Personal trading journal with live DEX prices and auto-close",
    version=settings.app_version,
    lifespan=lifespan,
)

app.include_router(trades_router)
app.include_router(market_router)
app.include_router(analysis_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    status_code = 404 if isinstance(exc, NotFoundError) else 400
    content = {"error": exc.code, "message": exc.message}
    if isinstance(exc, StructuralParseError):
        content["missing_columns"] = exc.missing_columns
        content["warnings"] = exc.warnings
    return JSONResponse(status_code=status_code, content=content)


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
