"""API v1 routers.

RESTful resource-based endpoints. All endpoints use resource nouns, not
action verbs.

Resources:
    /api/v1/users                      - Registration, current identity
    /api/v1/sessions                   - Session management (login/logout)
    /api/v1/tokens                     - Token management (refresh)
    /api/v1/two-factor                 - Second factors
    /api/v1/email-verifications        - Email verification
    /api/v1/email-verification-tokens  - Verification email resend
    /api/v1/password-reset-tokens      - Password reset token requests
    /api/v1/password-resets            - Password reset execution
    /api/v1/audit-events               - Security audit trail

Admin Resources:
    /api/v1/admin/lockouts/{identifier}  - Account lockouts
"""

from fastapi import APIRouter

from src.core.config import get_settings
from src.presentation.api.v1.admin import admin_router
from src.presentation.api.v1.audit_events import router as audit_events_router
from src.presentation.api.v1.email_verifications import (
    email_verification_tokens_router,
    email_verifications_router,
)
from src.presentation.api.v1.password_resets import (
    password_reset_tokens_router,
    password_resets_router,
)
from src.presentation.api.v1.sessions import router as sessions_router
from src.presentation.api.v1.tokens import router as tokens_router
from src.presentation.api.v1.two_factor import router as two_factor_router
from src.presentation.api.v1.users import router as users_router

# Create combined v1 router
v1_router = APIRouter(prefix=get_settings().api_v1_prefix)

# Include all resource routers
v1_router.include_router(users_router)
v1_router.include_router(sessions_router)
v1_router.include_router(tokens_router)
v1_router.include_router(two_factor_router)
v1_router.include_router(email_verifications_router)
v1_router.include_router(email_verification_tokens_router)
v1_router.include_router(password_reset_tokens_router)
v1_router.include_router(password_resets_router)
v1_router.include_router(audit_events_router)

# Include admin routers
v1_router.include_router(admin_router)

# Export individual routers for testing
__all__ = [
    "v1_router",
    "users_router",
    "sessions_router",
    "tokens_router",
    "two_factor_router",
    "email_verifications_router",
    "email_verification_tokens_router",
    "password_reset_tokens_router",
    "password_resets_router",
    "audit_events_router",
    "admin_router",
]
