"""Mahasiswa API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Token gate wraps every route except settings.auth_exempt_paths
    - Global error handlers map MahasiswaError → envelope JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Token gate added before CORS so CORS is the outer layer and answers preflights
    - Record routes mounted twice: /api/students (documented) and /api/mahasiswa (legacy path)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes import health, mahasiswa
from app.api.token_gate import register_token_gate
from app.config import get_settings
from app.infrastructure.database import init_db
from app.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_tables:
        await manager.create_tables()
    logger.info("Mahasiswa API started")
    yield
    await manager.close()
    logger.info("Mahasiswa API shutting down")


app = FastAPI(
    title="API Mahasiswa",
    version="1.0.0",
    description="Dokumentasi API Mahasiswa dengan Bearer Token",
    lifespan=lifespan,
)

settings = get_settings()
register_token_gate(app, settings)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(mahasiswa.router, prefix="/api/students")
app.include_router(
    mahasiswa.router, prefix="/api/mahasiswa", include_in_schema=False,
)
