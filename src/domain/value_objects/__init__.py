"""Domain value objects."""

from src.domain.value_objects.auth_policy import AuthPolicy

__all__ = ["AuthPolicy"]
