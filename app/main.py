from __future__ import annotations

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI

_LLM_ADAPTERS = ("openai", "mock")


def _validate_env() -> None:
    """
    Validate required environment variables at startup.

    Raises RuntimeError listing every missing or invalid variable so the
    operator can fix all problems in one restart cycle.

    Rules:
    - At least one database URL must be set; only PostgreSQL is accepted.
    - LLM_ADAPTER, when set, must be 'openai' or 'mock'.
    - A missing LLM key is not fatal: column mapping falls back to the
      heuristic and slide generation answers 503.
    """

    from db.config import load_env_files, resolve_database_url

    load_env_files()

    errors: list[str] = []

    # --- Database URL ---------------------------------------------------
    try:
        database_url = resolve_database_url()
    except RuntimeError as exc:
        errors.append(str(exc))
    else:
        if not database_url.startswith("postgresql"):
            errors.append("The database URL must point at PostgreSQL; domain snapshots are stored as JSONB.")

    # --- LLM adapter ----------------------------------------------------
    adapter = os.getenv("LLM_ADAPTER", "openai").strip().lower()
    if adapter not in _LLM_ADAPTERS:
        errors.append(f"LLM_ADAPTER='{adapter}' is not valid. Allowed values: {list(_LLM_ADAPTERS)}.")

    if errors:
        raise RuntimeError(
            "Startup validation failed: missing or invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Load every domain from remote storage (or the local cache) before serving."""
    from app.services.container import build_services

    services = await asyncio.to_thread(build_services)
    application.state.services = services
    logging.getLogger(__name__).info(
        "Domain registry ready source=%s populated=%d",
        services.load_source,
        len(services.registry.populated()),
    )
    try:
        yield
    finally:
        application.state.services = None
        logging.getLogger(__name__).info("Domain registry released")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _validate_env()
    _configure_logging()

    application = FastAPI(
        title="SalesBoard API",
        version="1.0.0",
        lifespan=_lifespan,
    )

    from app.api.routers import (
        domains_router,
        purge_router,
        slides_router,
        uploads_router,
    )

    application.include_router(domains_router)
    application.include_router(uploads_router)
    application.include_router(purge_router)
    application.include_router(slides_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        services = getattr(application.state, "services", None)
        return {
            "status": "ok",
            "load_source": services.load_source if services is not None else "starting",
        }

    return application


app = create_app()
