"""Admin API routers.

Admin-only endpoints (role claim OWNER or ADMIN).

Resources:
    /api/v1/admin/lockouts/{identifier}  - Account lockout state
"""

from fastapi import APIRouter

from src.presentation.api.v1.admin.lockouts import router as lockouts_router

# Create combined admin router
admin_router = APIRouter(prefix="/admin", tags=["Admin"])

# Include all admin routers
admin_router.include_router(lockouts_router)

# Export routers
__all__ = [
    "admin_router",
    "lockouts_router",
]
