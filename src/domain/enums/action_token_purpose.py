"""Purposes of single-use action tokens."""

from enum import Enum


class ActionTokenPurpose(str, Enum):
    """What a hashed single-use token authorizes."""

    PASSWORD_RESET = "PASSWORD_RESET"
    EMAIL_VERIFICATION = "EMAIL_VERIFICATION"
