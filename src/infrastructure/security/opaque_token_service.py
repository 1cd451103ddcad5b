"""Opaque token generation and digesting.

Action tokens (password reset, email verification) are random hex strings;
sessions key on the refresh token. Both are stored as SHA-256 digests so a
leaked table reveals nothing usable, while lookups stay a single indexed
equality match. The tokens carry 256 bits of entropy, so a fast digest is
enough (no salt, no key stretching).

Architecture:
    - Infrastructure service (no protocol needed)
    - Used by application services directly
"""

import hashlib
import secrets

TOKEN_BYTES = 32


class OpaqueTokenService:
    """Random token generation and SHA-256 digests.

    Usage:
        token = OpaqueTokenService.generate_token()   # 64 hex chars, goes in the email
        digest = OpaqueTokenService.digest(token)     # goes in the store
    """

    @staticmethod
    def generate_token() -> str:
        return secrets.token_hex(TOKEN_BYTES)

    @staticmethod
    def digest(token: str) -> str:
        return hashlib.sha256(token.encode("utf-8")).hexdigest()
