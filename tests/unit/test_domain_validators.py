"""Unit tests for validators and the Annotated types built on them."""

import pytest
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from src.domain.types import ActionTokenValue, Email, Password, SecondFactorCode, Username
from src.domain.validators import (
    validate_email,
    validate_second_factor_code,
    validate_strong_password,
    validate_token_format,
    validate_username,
)


@pytest.mark.unit
class TestValidators:
    """Test pure validation functions."""

    def test_email_is_normalized_to_lowercase(self):
        assert validate_email("Alice@Example.COM") == "alice@example.com"

    def test_invalid_email_rejected(self):
        with pytest.raises(ValueError, match="Invalid email format"):
            validate_email("not-an-email")

    @pytest.mark.parametrize(
        ("password", "message"),
        [
            ("Sh0rt!", "at least 8"),
            ("nouppercase1!", "uppercase"),
            ("NOLOWERCASE1!", "lowercase"),
            ("NoDigitsHere!", "digit"),
            ("NoSpecial123", "special"),
        ],
    )
    def test_weak_passwords_rejected(self, password, message):
        with pytest.raises(ValueError, match=message):
            validate_strong_password(password)

    def test_strong_password_accepted(self):
        assert validate_strong_password("Secr3t!Pass") == "Secr3t!Pass"

    def test_username_cannot_contain_at_sign(self):
        with pytest.raises(ValueError):
            validate_username("alice@example")

    def test_username_allows_dot_dash_underscore(self):
        assert validate_username("a.l-i_ce") == "a.l-i_ce"

    def test_token_is_lowercased_hex(self):
        assert validate_token_format("ABCDEF0123") == "abcdef0123"

    def test_non_hex_token_rejected(self):
        with pytest.raises(ValueError, match="hexadecimal"):
            validate_token_format("xyz")

    @pytest.mark.parametrize("code", ["123456", " 123456 ", "a1b2c3d4", "A1B2C3D4"])
    def test_second_factor_codes_accepted(self, code):
        assert validate_second_factor_code(code) == code.strip()

    @pytest.mark.parametrize("code", ["12345", "1234567", "ZZZZZZZZ", "12 3456"])
    def test_malformed_second_factor_codes_rejected(self, code):
        with pytest.raises(ValueError):
            validate_second_factor_code(code)


class _Registration(BaseModel):
    email: Email
    username: Username
    password: Password


class _Code(BaseModel):
    code: SecondFactorCode


class _Token(BaseModel):
    token: ActionTokenValue


@pytest.mark.unit
class TestAnnotatedTypes:
    """Test the types validate through Pydantic."""

    def test_registration_fields_validate(self):
        model = _Registration(
            email="Alice@Example.com", username="alice", password="Secr3t!Pass"
        )

        assert model.email == "alice@example.com"

    def test_weak_password_fails_model_validation(self):
        with pytest.raises(PydanticValidationError):
            _Registration(email="a@example.com", username="a", password="weakpass")

    def test_code_is_stripped(self):
        assert _Code(code=" 123456 ").code == "123456"

    def test_short_token_rejected(self):
        with pytest.raises(PydanticValidationError):
            _Token(token="abc")
