"""TOTP authenticator backed by pyotp and qrcode.

RFC 6238: 6-digit codes, 30-second step, HMAC-SHA1, base32 secrets.
Compatible with Google Authenticator, Authy, Aegis.
"""

import base64
import io

import pyotp
import qrcode
from qrcode.constants import ERROR_CORRECT_L

SECRET_LENGTH = 32  # base32 chars = 160 bits


class PyOtpAuthenticator:
    """Implements TotpAuthenticatorProtocol."""

    def generate_secret(self) -> str:
        return pyotp.random_base32(length=SECRET_LENGTH)

    def provisioning_uri(self, secret: str, label: str, issuer: str) -> str:
        """otpauth://totp/{issuer}:{label}?secret=...&issuer={issuer}"""
        return pyotp.TOTP(secret).provisioning_uri(name=label, issuer_name=issuer)

    def qr_code_data_url(self, uri: str) -> str:
        """Render the URI as a PNG QR code.

        Frontend can display it directly with ``<img src="{result}">``.
        """
        qr = qrcode.QRCode(
            version=1,
            error_correction=ERROR_CORRECT_L,
            box_size=10,
            border=4,
        )
        qr.add_data(uri)
        qr.make(fit=True)
        image = qr.make_image(fill_color="black", back_color="white")

        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
        return f"data:image/png;base64,{encoded}"

    def verify(self, secret: str, code: str, valid_window: int) -> bool:
        code = code.strip().replace(" ", "")
        if len(code) != 6 or not code.isdigit():
            return False
        return pyotp.TOTP(secret).verify(code, valid_window=valid_window)
