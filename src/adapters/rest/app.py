"""
FastAPI application — REST adapter for ENS Savant.

Usage:
    python run_api.py

Or directly:
    uvicorn adapters.rest.app:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

# Ensure src/ is on sys.path when invoked via uvicorn directly
_src_dir = Path(__file__).resolve().parent.parent.parent
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from infrastructure.config import Settings
from factory import ServiceFactory
from adapters.rest.dependencies import get_factory, set_factory
from adapters.rest.routers import chat
from adapters.rest.schemas import HealthOut

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def create_app(factory: Optional[ServiceFactory] = None) -> FastAPI:
    """Build the FastAPI app.

    With no factory, settings are read from the environment at startup and
    missing credentials abort startup. The agent itself is built lazily on
    the first chat request.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if factory is not None:
            set_factory(factory)
        else:
            config = Settings.from_env()
            config.validate_agent()
            set_factory(ServiceFactory(config))
        logger.info("ENS Savant API ready")
        yield
        set_factory(None)

    app = FastAPI(
        title="ENS Savant",
        version=__version__,
        description="Conversational assistant for ENS registration activity.",
        lifespan=lifespan,
    )

    # CORS — permissive for development; tighten allowed_origins in production
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(chat.router)
    app.add_exception_handler(RequestValidationError, chat.chat_validation_handler)

    @app.get("/health", tags=["health"], response_model=HealthOut)
    async def health():
        return HealthOut(
            status="ok",
            version=__version__,
            agent_ready=get_factory().agent_resource.ready,
        )

    return app


app = create_app()
