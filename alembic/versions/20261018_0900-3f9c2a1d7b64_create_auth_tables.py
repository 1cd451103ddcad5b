"""Create authentication tables

Revision ID: 3f9c2a1d7b64
Revises:
Create Date: 2026-10-18 09:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f9c2a1d7b64"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns(mutable: bool = True) -> list[sa.Column]:
    """Primary key and timestamps from BaseModel / BaseMutableModel."""
    columns = [
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]
    if mutable:
        columns.append(
            sa.Column(
                "updated_at",
                sa.DateTime(timezone=True),
                server_default=sa.text("now()"),
                nullable=False,
            )
        )
    return columns


def _identity_fk() -> sa.Column:
    return sa.Column("identity_id", sa.Uuid(), nullable=False)


def upgrade() -> None:
    """Create identity, credential, session, second-factor and audit tables."""
    op.create_table(
        "identities",
        *_base_columns(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("display_name", sa.String(length=100), nullable=True),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column(
            "email_verified_at",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="NULL until the email address is verified",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_identities_email"),
        sa.UniqueConstraint("username", name="uq_identities_username"),
    )

    op.create_table(
        "credentials",
        *_base_columns(),
        _identity_fk(),
        sa.Column(
            "password_hash",
            sa.String(length=255),
            nullable=False,
            comment="Argon2id hash",
        ),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["identity_id"], ["identities.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("identity_id"),
    )

    op.create_table(
        "sessions",
        *_base_columns(mutable=False),
        _identity_fk(),
        sa.Column(
            "token_digest",
            sa.String(length=64),
            nullable=False,
            comment="SHA-256 hex digest of the refresh token",
        ),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["identity_id"], ["identities.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "idx_sessions_identity_digest",
        "sessions",
        ["identity_id", "token_digest"],
        unique=False,
    )

    op.create_table(
        "second_factors",
        *_base_columns(),
        _identity_fk(),
        sa.Column(
            "type",
            sa.String(length=10),
            nullable=False,
            comment="Second factor type: TOTP, EMAIL",
        ),
        sa.Column(
            "secret",
            sa.Text(),
            nullable=False,
            comment="AES-256-GCM encrypted TOTP secret (empty for EMAIL)",
        ),
        sa.Column("enabled", sa.Boolean(), nullable=False),
        sa.Column("recovery_code_hashes", sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["identity_id"], ["identities.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "identity_id", "type", name="uq_second_factors_identity_type"
        ),
    )

    op.create_table(
        "email_otp_challenges",
        *_base_columns(),
        _identity_fk(),
        sa.Column("code_hash", sa.String(length=255), nullable=False),
        sa.Column("attempts", sa.Integer(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["identity_id"], ["identities.id"], ondelete="CASCADE"),
    )
    op.create_index(
        op.f("ix_email_otp_challenges_identity_id"),
        "email_otp_challenges",
        ["identity_id"],
        unique=False,
    )

    op.create_table(
        "login_attempts",
        *_base_columns(mutable=False),
        sa.Column("identifier", sa.String(length=255), nullable=False),
        sa.Column("ip_address", sa.String(length=45), nullable=True),
        sa.Column("success", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_login_attempts_identifier_created",
        "login_attempts",
        ["identifier", "created_at"],
        unique=False,
    )

    op.create_table(
        "audit_events",
        *_base_columns(mutable=False),
        # No FK: audit rows outlive the identity they describe
        sa.Column("identity_id", sa.Uuid(), nullable=True),
        sa.Column("action", sa.String(length=50), nullable=False),
        sa.Column("method", sa.String(length=20), nullable=True),
        sa.Column("success", sa.Boolean(), nullable=False),
        sa.Column("ip_address", sa.String(length=45), nullable=True),
        sa.Column("user_agent", sa.String(length=500), nullable=True),
        sa.Column(
            "metadata",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_audit_events_identity_action",
        "audit_events",
        ["identity_id", "action"],
        unique=False,
    )
    # Append-only: UPDATE and DELETE silently do nothing
    op.execute(
        "CREATE RULE audit_events_no_update AS ON UPDATE TO audit_events "
        "DO INSTEAD NOTHING"
    )
    op.execute(
        "CREATE RULE audit_events_no_delete AS ON DELETE TO audit_events "
        "DO INSTEAD NOTHING"
    )

    op.create_table(
        "action_tokens",
        *_base_columns(),
        _identity_fk(),
        sa.Column(
            "purpose",
            sa.String(length=30),
            nullable=False,
            comment="Token purpose: PASSWORD_RESET, EMAIL_VERIFICATION",
        ),
        sa.Column("token_digest", sa.String(length=64), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("used", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["identity_id"], ["identities.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "idx_action_tokens_purpose_digest",
        "action_tokens",
        ["purpose", "token_digest"],
        unique=True,
    )
    op.create_index(
        "idx_action_tokens_identity_purpose",
        "action_tokens",
        ["identity_id", "purpose"],
        unique=False,
    )

    # created_at is indexed on every table (BaseModel)
    for table in (
        "identities",
        "credentials",
        "sessions",
        "second_factors",
        "email_otp_challenges",
        "login_attempts",
        "audit_events",
        "action_tokens",
    ):
        op.create_index(
            op.f(f"ix_{table}_created_at"), table, ["created_at"], unique=False
        )


def downgrade() -> None:
    """Drop authentication tables."""
    op.execute("DROP RULE IF EXISTS audit_events_no_delete ON audit_events")
    op.execute("DROP RULE IF EXISTS audit_events_no_update ON audit_events")
    for table in (
        "action_tokens",
        "audit_events",
        "login_attempts",
        "email_otp_challenges",
        "second_factors",
        "sessions",
        "credentials",
        "identities",
    ):
        op.drop_table(table)
