"""
FastAPI Backend dla silnika pathfindingu.

Endpoints:
    GET    /api/health           - health check
    GET    /api/presets          - lista presetów planszy
    POST   /api/path             - ścieżka A* między dwoma hexami
    POST   /api/closest-targets  - mapy najbliższych wrogów / sojuszników
    POST   /api/debug-paths      - ścieżki do najbliższych celów (overlay)
    GET    /api/cache/stats      - rozmiary cache
    DELETE /api/cache            - czyszczenie cache (opcjonalnie ?kind=...)

Uruchomienie:
    uvicorn hexpath.api.main:app --reload
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routers import pathfinding

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown events."""
    warnings = pathfinding.get_loader().validate()
    logger.info("Pathfinding API starting (%d config warnings)", len(warnings))
    yield
    pathfinding.clear_all_caches()
    logger.info("Pathfinding API shutting down")


app = FastAPI(
    title="Hex Pathfinding API",
    description="Pathfinding and target acquisition queries for the tactical hex grid",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS - allow all origins (including file://)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(pathfinding.router, prefix="/api", tags=["Pathfinding"])


@app.get("/api/health")
async def health():
    """API health check."""
    return {"status": "healthy"}
