"""Domain enums.

Available Enums:
    - AuditAction: Audit trail action tags
    - UserRole: Identity roles (OWNER, ADMIN, USER)
    - SecondFactorType: TOTP or EMAIL
    - ActionTokenPurpose: Password reset or email verification
    - NotificationTemplate: Outbound message templates
"""

from src.domain.enums.action_token_purpose import ActionTokenPurpose
from src.domain.enums.audit_action import AuditAction
from src.domain.enums.notification_template import NotificationTemplate
from src.domain.enums.second_factor_type import SecondFactorType
from src.domain.enums.user_role import UserRole

__all__ = [
    "ActionTokenPurpose",
    "AuditAction",
    "NotificationTemplate",
    "SecondFactorType",
    "UserRole",
]
