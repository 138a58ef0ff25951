"""FastAPI ops application entry point with lifespan management."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lift_logger.api.router import api_router
from lift_logger.config import settings
from lift_logger.dependencies import get_backend_client, get_catalog_refresher

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application startup and shutdown lifecycle."""
    logger.info("Starting Lift Logger ops API...")

    # Warm the exercise catalog and keep refreshing it
    refresher = get_catalog_refresher()
    await refresher.start()
    logger.info("Catalog refresher initialized successfully")

    yield

    # Cleanup
    await refresher.shutdown()
    await get_backend_client().close()
    logger.info("Lift Logger ops API shut down cleanly")


app = FastAPI(
    title="Lift Logger API",
    description="Ops endpoints for the workout logging chat relay",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.frontend_url,
        "http://localhost:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount API routes
app.include_router(api_router, prefix="/api")

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
