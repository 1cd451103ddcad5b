"""Logging adapters.

Usage:
    from src.core.container import get_logger

    logger = get_logger()
    logger.info("Login succeeded", identity_id=str(identity.id))
"""

from src.infrastructure.logging.console_adapter import ConsoleAdapter

__all__ = ["ConsoleAdapter"]
