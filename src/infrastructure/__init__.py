"""Infrastructure layer - Adapters and external integrations.

This layer contains implementations of domain protocols (ports):
- persistence/: SQLAlchemy models and repositories
- cache/: Redis counters and flags
- security/: Argon2, JWT, AES-GCM codec, TOTP
- email/: Stub and SES notifiers
- audit/: PostgreSQL audit trail
- logging/: structlog console adapter

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
