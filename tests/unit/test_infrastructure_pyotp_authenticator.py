"""Unit tests for PyOtpAuthenticator."""

import base64
from urllib.parse import parse_qs, unquote, urlparse

import pyotp
import pytest
from freezegun import freeze_time

from src.infrastructure.security import PyOtpAuthenticator


@pytest.mark.unit
class TestPyOtpAuthenticator:
    """Test TOTP primitives."""

    def test_secret_is_32_base32_characters(self, authenticator):
        secret = authenticator.generate_secret()

        assert len(secret) == 32
        base64.b32decode(secret)

    def test_provisioning_uri_names_issuer_and_label(self, authenticator):
        secret = authenticator.generate_secret()

        uri = authenticator.provisioning_uri(secret, "alice@example.com", "Gatehouse")

        parsed = urlparse(uri)
        assert parsed.scheme == "otpauth"
        assert parsed.netloc == "totp"
        assert "alice@example.com" in unquote(parsed.path)
        query = parse_qs(parsed.query)
        assert query["secret"] == [secret]
        assert query["issuer"] == ["Gatehouse"]

    def test_qr_code_is_png_data_url(self, authenticator):
        data_url = authenticator.qr_code_data_url("otpauth://totp/x?secret=ABC")

        assert data_url.startswith("data:image/png;base64,")
        png = base64.b64decode(data_url.removeprefix("data:image/png;base64,"))
        assert png[:8] == b"\x89PNG\r\n\x1a\n"

    def test_current_code_verifies(self, authenticator):
        secret = authenticator.generate_secret()

        assert authenticator.verify(secret, pyotp.TOTP(secret).now(), valid_window=0)

    def test_code_with_spaces_is_normalized(self, authenticator):
        secret = authenticator.generate_secret()
        code = pyotp.TOTP(secret).now()

        assert authenticator.verify(secret, f" {code[:3]} {code[3:]} ", valid_window=0)

    def test_drift_within_window_is_accepted(self, authenticator):
        secret = authenticator.generate_secret()
        with freeze_time("2026-01-01 12:00:00"):
            code = pyotp.TOTP(secret).now()

        with freeze_time("2026-01-01 12:01:00"):
            assert authenticator.verify(secret, code, valid_window=2)
            assert not authenticator.verify(secret, code, valid_window=1)

    @pytest.mark.parametrize("code", ["", "12345", "1234567", "abcdef"])
    def test_malformed_codes_are_rejected(self, authenticator, code):
        assert not authenticator.verify(authenticator.generate_secret(), code, 2)
