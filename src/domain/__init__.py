"""Domain layer - Pure business logic.

This layer contains the core business entities, value objects, protocols
(ports) and domain errors. The domain layer has NO dependencies on
infrastructure - only pydantic for annotated types.

Structure:
- entities/: Domain entities (mutable, have identity)
- value_objects/: Value objects (immutable, no identity)
- protocols/: Domain protocols (repository interfaces, service interfaces)
- errors/: Domain errors returned inside Failure
- enums/: Roles, factor types, audit actions, templates

The domain layer defines WHAT authentication does, not HOW it's implemented.
"""
