from __future__ import annotations

from resumatch.api.routes.health import router as health_router
from resumatch.api.routes.match import router as match_router

__all__ = ["health_router", "match_router"]
