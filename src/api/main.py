import logging
import os
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.adapters.sqlite.migrator import SQLiteMigrator
from src.api.deps import get_settings
from src.app_shell.config import configure_logging, validate_ops_rules
from src.rules.loader import load_rules

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    configure_logging()
    settings = get_settings()

    # Load rules and validate on startup (fail-fast)
    try:
        rules = load_rules(settings.rules_path)
    except (FileNotFoundError, ValueError) as e:
        logger.critical("Rules load failed: %s", e)
        sys.exit(1)
    validate_ops_rules(rules, settings.base_dir)
    logger.info("Rules loaded from %s", settings.rules_path)

    try:
        SQLiteMigrator(settings.db_path, settings.migrations_dir).run_migrations()
    except (OSError, RuntimeError) as e:
        logger.critical("Database migration failed: %s", e)
        sys.exit(1)

    yield


app = FastAPI(
    title="Portfolio Showcase API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from src.api.routes import (  # noqa: E402
    admin_analytics,
    admin_contact,
    admin_projects,
    public,
)

app.include_router(public.router, prefix="/api/public", tags=["Public"])
app.include_router(admin_projects.router, prefix="/api/admin/projects", tags=["Admin Projects"])
app.include_router(admin_analytics.router, prefix="/api/admin/analytics", tags=["Admin Analytics"])
app.include_router(
    admin_contact.router, prefix="/api/admin/contact-requests", tags=["Admin Contact"]
)


# CORS (Allow Frontend)
origins = [
    origin.strip()
    for origin in os.environ.get(
        "PORTFOLIO_CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
    ).split(",")
    if origin.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "api"}
