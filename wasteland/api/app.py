"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wasteland import __version__
from wasteland.api.dependencies import set_engine_manager
from wasteland.api.engine_manager import EngineManager
from wasteland.api.routes import api_router
from wasteland.config import SimulationConfig
from wasteland.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: SimulationConfig | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = SimulationConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = EngineManager(_config)
        set_engine_manager(manager)
        logger.info("API server started (seed=%d).", _config.world_seed)
        yield
        set_engine_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Wasteland Shelter Simulation",
        description=(
            "Turn-based shelter and exploration simulation core.\n\n"
            "## API Groups\n\n"
            "- **State**: party, exploration board, holding area, warehouse, event feed\n"
            "- **Map**: world map cells with exploration progress and death drops\n"
            "- **Control**: start expeditions, advance rounds, travel, reset\n"
            "- **Progression**: quests and chapters\n"
        ),
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "State", "description": "Live session state polled by the UI."},
            {"name": "Map", "description": "World map grid. Cell types change only when a point is fully explored."},
            {"name": "Control", "description": "The caller-driven actions: advance one round and request a path, plus expedition and shelter actions."},
            {"name": "Progression", "description": "Quest and chapter state machines."},
        ],
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    return app
