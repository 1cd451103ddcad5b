"""Identity roles.

Roles are carried as a token claim. Authorization policies are not part of
this service; only the lockout administration endpoints check the role,
otherwise it is informational for downstream consumers.

Usage:
    from src.domain.enums import UserRole

    if identity.role == UserRole.OWNER:
        ...
"""

from enum import Enum


class UserRole(str, Enum):
    """Identity roles.

    String Enum:
        Inherits from str for easy serialization into JWT claims and
        database storage. Values are uppercase to match stored records.
    """

    OWNER = "OWNER"
    """Owner of the installation (single tenant)."""

    ADMIN = "ADMIN"
    """Administrator."""

    USER = "USER"
    """Default role assigned at registration."""

    @classmethod
    def values(cls) -> list[str]:
        """Get all role values as strings.

        Returns:
            list[str]: List of role values ['OWNER', 'ADMIN', 'USER'].
        """
        return [role.value for role in cls]
