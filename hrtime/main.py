"""
Main FastAPI application.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hrtime.api import api_router
from hrtime.core.config import settings
from hrtime.core.logging import logger
from hrtime.core.session import session_store
from hrtime.services.api_client import HRApiClient


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events."""
    # Startup
    logger.info(f"Connecting to HR backend at {settings.UPSTREAM_API_URL}")
    app.state.api_client = HRApiClient.from_settings()
    session_store.init()

    yield

    # Shutdown
    logger.info("Closing HR backend client...")
    session_store.teardown()
    await app.state.api_client.aclose()
    app.state.api_client = None


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)

# Include API router
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Welcome to the HR Timesheet Portal API"}


if __name__ == "__main__":
    # Run application with uvicorn
    logger.info(f"Starting application on {settings.HOST}:{settings.PORT}")
    uvicorn.run(
        "hrtime.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )
