from __future__ import annotations

from adsdash.api.routes.errors import router as errors_router
from adsdash.api.routes.health import router as health_router

__all__ = ["errors_router", "health_router"]
