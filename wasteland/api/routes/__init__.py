"""Versioned API route modules."""

from fastapi import APIRouter

from wasteland.api.routes.control import router as control_router
from wasteland.api.routes.map import router as map_router
from wasteland.api.routes.progression import router as progression_router
from wasteland.api.routes.state import router as state_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(map_router, tags=["Map"])
api_router.include_router(state_router, tags=["State"])
api_router.include_router(control_router, tags=["Control"])
api_router.include_router(progression_router, tags=["Progression"])

__all__ = ["api_router"]
