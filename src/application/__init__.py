"""Application layer - Use cases and orchestration.

This layer contains the application's use cases following the CQRS pattern:
- Commands: Write operations that change state
- Queries: Read operations that fetch data
- Services: Engines shared by several handlers (lockout, OTP, TOTP, tokens)

Structure:
- commands/: Command dataclasses and handlers (write operations)
- queries/: Query dataclasses and handlers (read operations)
- services/: Lockout tracker, email OTP and TOTP engines, token issuer,
  password reset and email verification, audit recorder
- dtos/: Result dataclasses returned to the presentation layer

The application layer orchestrates domain logic but contains no business rules.
"""
