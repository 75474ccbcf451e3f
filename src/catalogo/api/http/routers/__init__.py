from .errors import router as errors_router
from .health import router as health_router
from .productos import router as productos_router

__all__ = ["errors_router", "health_router", "productos_router"]
