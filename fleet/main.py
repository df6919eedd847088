"""
Main FastAPI application for the fleet selection service.
Manages drivers, cars and which driver has which car selected.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from sqlalchemy import text
import logging
from typing import AsyncGenerator

from fleet.core.config import settings
from fleet.core.database import engine, Base
from fleet.core.exceptions import FleetError
from fleet.core.logging import setup_logging
from fleet.api.v1.api import api_router
from fleet.api.v1.schemas import ErrorResponse, HealthResponse
from fleet.models import car, driver, selection  # noqa: F401  (register tables)

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events."""
    # Startup
    logger.info("Starting Fleet Selection Application...")
    
    # Create database tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    logger.info("Application startup complete")
    
    yield
    
    # Shutdown
    logger.info("Shutting down application...")
    await engine.dispose()

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(status=status_code, message=message).model_dump()
    )

def register_exception_handlers(app: FastAPI) -> None:
    """Map every error to the {status, message} shape."""
    
    @app.exception_handler(FleetError)
    async def fleet_error_handler(request: Request, exc: FleetError):
        if exc.status_code >= 500:
            logger.error(f"Unrecoverable error on {request.url.path}: {exc.message}")
        else:
            logger.warning(f"Request to {request.url.path} failed: {exc.message}")
        return _error(exc.status_code, exc.message)
    
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"{location}: {first.get('msg', 'invalid request')}" if location else "Invalid request"
        return _error(status.HTTP_400_BAD_REQUEST, message)
    
    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.url.path}: {exc}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

def create_app() -> FastAPI:
    app = FastAPI(
        title="Fleet Selection API",
        description="Drivers, cars and the one-driver-per-car selection between them",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    
    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    register_exception_handlers(app)
    
    # Include API routes
    app.include_router(api_router, prefix=settings.API_V1_STR)
    
    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "Fleet Selection API",
            "version": "1.0.0",
            "docs": "/docs"
        }
    
    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint."""
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            database_connected = True
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            database_connected = False
        
        return HealthResponse(
            status="healthy" if database_connected else "degraded",
            service="fleet-selection",
            timestamp=datetime.now(timezone.utc),
            database_connected=database_connected
        )
    
    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "fleet.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development(),
        log_level=settings.LOG_LEVEL.lower()
    )
