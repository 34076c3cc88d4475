"""API routers."""
from popgen.routers.pressure import router as pressure_router

__all__ = ["pressure_router"]
