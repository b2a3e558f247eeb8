"""API routers for the recipescaler application."""

from recipescaler.routers.scaling import router as scaling_router

__all__ = [
    "scaling_router",
]
