import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from logimaster import __version__
from logimaster.api.deps import get_settings
from logimaster.app_shell.config import validate_ops_rules
from logimaster.rules.loader import load_rules

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Load rules and validate on startup (fail-fast)
    try:
        rules = load_rules(settings.rules_path)
        validate_ops_rules(rules, settings.base_dir)
    except Exception:
        logger.critical("Rules load failed for %s", settings.rules_path, exc_info=True)
        raise
    logger.info("Rules loaded from %s", settings.rules_path)

    yield


app = FastAPI(
    title="LogiMaster API",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from logimaster.api.routes import (  # noqa: E402
    backup,
    company,
    dashboard,
    expenses,
    operations,
    registry,
    reports,
)

app.include_router(registry.router, prefix="/api/registry", tags=["Registry"])
app.include_router(operations.router, prefix="/api/operations", tags=["Operations"])
app.include_router(expenses.router, prefix="/api/expenses", tags=["Expenses"])
app.include_router(company.router, prefix="/api/company", tags=["Company"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"])
app.include_router(reports.router, prefix="/api/reports", tags=["Reports"])
app.include_router(backup.router, prefix="/api/backup", tags=["Backup"])


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "api"}
