"""FastAPI entry point for the jobtrack editor backend."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobtrack.config import settings
from jobtrack.routers import catalog, editor
from jobtrack.services.catalog_service import catalog_service
from jobtrack.services.editor_service import editor_service
from jobtrack.services.store_client import StoreClient

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting jobtrack backend on %s:%d", settings.host, settings.port)
    store = StoreClient()
    editor_service.initialize(store)
    catalog_service.initialize(store)

    yield

    # Shutdown
    editor_service.close()
    await store.close()
    logger.info("jobtrack backend stopped")


app = FastAPI(
    title="jobtrack",
    description="Job application editor backed by a REST store",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # localhost only; tighten in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(editor.router)
app.include_router(catalog.router)


@app.get("/health")
async def health() -> dict:
    return {
        "status": "ok",
        "store_url": settings.api_base_url,
        "submission_state": editor_service.submission_state.value,
    }


if __name__ == "__main__":
    uvicorn.run(
        "jobtrack.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
    )
