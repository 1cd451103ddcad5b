"""Email templates.

Plain str.format templates keyed by NotificationTemplate. Missing context
keys surface as KeyError at render time, which the notifiers report as a
delivery failure.
"""

from dataclasses import dataclass
from typing import Any

from src.domain.enums import NotificationTemplate


@dataclass(frozen=True, slots=True)
class RenderedEmail:
    subject: str
    text_body: str
    html_body: str


_TEMPLATES: dict[NotificationTemplate, tuple[str, str]] = {
    NotificationTemplate.OTP_CODE: (
        "Your verification code",
        "Your verification code is {otp}.\n\n"
        "It expires in {expiry_minutes} minutes. If you did not try to sign "
        "in, you can ignore this email.",
    ),
    NotificationTemplate.ACCOUNT_LOCKED: (
        "Your account has been locked",
        "Hi {name},\n\n"
        "We locked your account for {lockout_minutes} minutes after several "
        "failed sign-in attempts. You can try again after {unlock_time}.\n\n"
        "If this wasn't you, reset your password once the lock expires.",
    ),
    NotificationTemplate.RESET_PASSWORD: (
        "Reset your password",
        "Hi {name},\n\n"
        "Use the link below to choose a new password:\n{reset_url}\n\n"
        "The link expires in {expiry_minutes} minutes.",
    ),
    NotificationTemplate.PASSWORD_CHANGED: (
        "Your password was changed",
        "Hi {name},\n\n"
        "Your password was just changed and all your sessions were signed "
        "out. If you did not do this, contact support immediately.",
    ),
    NotificationTemplate.VERIFY_EMAIL: (
        "Verify your email address",
        "Hi {name},\n\n"
        "Confirm your email address by opening:\n{verification_url}\n\n"
        "The link expires in {expiry_hours} hours.",
    ),
}


def render(template: NotificationTemplate, context: dict[str, Any]) -> RenderedEmail:
    """Render subject and bodies for a template.

    Raises:
        KeyError: If the context lacks a variable the template uses.
    """
    subject, text = _TEMPLATES[template]
    text_body = text.format(**context)
    paragraphs = "".join(
        f"<p>{paragraph.replace(chr(10), '<br>')}</p>"
        for paragraph in text_body.split("\n\n")
    )
    return RenderedEmail(
        subject=subject,
        text_body=text_body,
        html_body=f"<html><body>{paragraphs}</body></html>",
    )
