"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from umbra import __version__
from umbra.api.dependencies import set_engine_manager
from umbra.api.engine_manager import EngineManager
from umbra.api.routes import api_router
from umbra.config import SimulationConfig
from umbra.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: SimulationConfig | None = None, autostart: bool = True) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = SimulationConfig()

    _config = config.validate()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = EngineManager(_config)
        set_engine_manager(manager)
        if autostart:
            manager.start()
        logger.info("API server started (seed=%d, autostart=%s).", manager.seed, autostart)
        yield
        manager.stop()
        set_engine_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Umbra Life Simulation",
        description=(
            "Toroidal Game-of-Life engine with a forager and a steerable player.\n\n"
            "## API Groups\n\n"
            "- **State**: Per-tick snapshot: live cells, observer, player, plants, events\n"
            "- **Map**: RLE-encoded cell grid plus the grid-to-pixel layout\n"
            "- **Player**: Movement commands (the keyboard's job in a desktop viewer)\n"
            "- **Control**: Simulation lifecycle: start, pause, resume, step, reset, speed\n"
            "- **Config**: Read-only simulation configuration\n"
        ),
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "State", "description": "Latest published snapshot. Never shows a half-computed generation."},
            {"name": "Map", "description": "Whole grid as run-length encoded alive/dead cells."},
            {"name": "Player", "description": "Move the player box; the response reports the cells it overlaps."},
            {"name": "Control", "description": "Simulation lifecycle controls: start, pause, resume, single-step, reset and speed."},
            {"name": "Config", "description": "Read-only simulation configuration parameters."},
        ],
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app
