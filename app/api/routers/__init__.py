"""
app/api/routers package marker.
"""

from app.api.routers.domains import router as domains_router
from app.api.routers.purge import router as purge_router
from app.api.routers.slides import router as slides_router
from app.api.routers.uploads import router as uploads_router

__all__ = [
    "domains_router",
    "purge_router",
    "slides_router",
    "uploads_router",
]
