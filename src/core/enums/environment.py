"""Application environment types.

Selects environment-specific wiring in the container:
- DEVELOPMENT: console logs, emails logged instead of sent
- TESTING: JSON logs, emails logged
- CI: same as TESTING
- PRODUCTION: JSON logs, emails sent through AWS SES, secure cookies
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
