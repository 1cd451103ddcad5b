"""Commands - Write operations that change state.

Commands represent user intent to perform an action. They are immutable
dataclasses with imperative names (RegisterIdentity, ConfirmTotpSetup).

Each command has a corresponding handler that contains the business logic
to execute the command.
"""

from src.application.commands.account_recovery_commands import (
    ConfirmPasswordReset,
    RequestPasswordReset,
    ResendVerificationEmail,
    VerifyEmail,
)
from src.application.commands.auth_commands import (
    LoginIdentity,
    LogoutIdentity,
    RefreshTokens,
    RegisterIdentity,
)
from src.application.commands.lockout_commands import (
    PurgeExpiredRecords,
    UnlockAccount,
)
from src.application.commands.two_factor_commands import (
    ConfirmTotpSetup,
    DisableTwoFactor,
    EnableEmailOtp,
    InitiateTotpSetup,
    ResendOtp,
)

__all__ = [
    # Auth commands
    "LoginIdentity",
    "LogoutIdentity",
    "RefreshTokens",
    "RegisterIdentity",
    # Two-factor commands
    "ConfirmTotpSetup",
    "DisableTwoFactor",
    "EnableEmailOtp",
    "InitiateTotpSetup",
    "ResendOtp",
    # Account recovery commands
    "ConfirmPasswordReset",
    "RequestPasswordReset",
    "ResendVerificationEmail",
    "VerifyEmail",
    # Lockout administration and housekeeping
    "PurgeExpiredRecords",
    "UnlockAccount",
]
