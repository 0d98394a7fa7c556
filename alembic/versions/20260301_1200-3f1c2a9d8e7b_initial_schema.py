"""initial_schema

Revision ID: 3f1c2a9d8e7b
Revises:
Create Date: 2026-03-01 12:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d8e7b"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_and_created_at() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def _updated_at() -> sa.Column:
    return sa.Column(
        "updated_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("now()"),
        nullable=False,
    )


def upgrade() -> None:
    """Create members, secret_tokens, contributions, causes and image tables."""
    op.create_table(
        "members",
        *_id_and_created_at(),
        _updated_at(),
        sa.Column("name", sa.String(length=255), nullable=False, comment="Display name"),
        sa.Column(
            "email",
            sa.String(length=255),
            nullable=True,
            comment="Normalized email address",
        ),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column(
            "password_hash",
            sa.String(length=255),
            nullable=True,
            comment="Bcrypt password hash",
        ),
        sa.Column("is_admin", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("email_verified", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("email_verified_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_members_email", "members", ["email"], unique=True)

    op.create_table(
        "secret_tokens",
        *_id_and_created_at(),
        sa.Column(
            "member_id",
            sa.Uuid(),
            nullable=False,
            comment="Member the token was issued to",
        ),
        sa.Column(
            "kind",
            sa.Enum("email_verification", "password_reset", name="secret_token_kind"),
            nullable=False,
        ),
        sa.Column(
            "token_hash",
            sa.String(length=64),
            nullable=False,
            comment="SHA-256 hex digest of the plaintext token",
        ),
        sa.Column("issued_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "consumed_at",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="Set once consumed or superseded",
        ),
        sa.ForeignKeyConstraint(["member_id"], ["members.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_secret_tokens_member_id", "secret_tokens", ["member_id"])
    op.create_index("ix_secret_tokens_token_hash", "secret_tokens", ["token_hash"], unique=True)
    op.create_index(
        "ix_secret_tokens_active",
        "secret_tokens",
        ["member_id", "kind", "consumed_at"],
    )

    op.create_table(
        "contributions",
        *_id_and_created_at(),
        _updated_at(),
        sa.Column("member_id", sa.Uuid(), nullable=False),
        sa.Column("amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("contributed_on", sa.Date(), nullable=False),
        sa.ForeignKeyConstraint(["member_id"], ["members.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_contributions_member_id", "contributions", ["member_id"])

    op.create_table(
        "causes",
        *_id_and_created_at(),
        _updated_at(),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("amount", sa.Numeric(precision=12, scale=2), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    for table, owner_table in (
        ("contribution_images", "contributions"),
        ("cause_images", "causes"),
    ):
        op.create_table(
            table,
            *_id_and_created_at(),
            sa.Column("owner_id", sa.Uuid(), nullable=False),
            sa.Column("url", sa.Text(), nullable=False),
            sa.ForeignKeyConstraint(["owner_id"], [f"{owner_table}.id"], ondelete="CASCADE"),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(f"ix_{table}_owner_id", table, ["owner_id"])


def downgrade() -> None:
    """Drop every table created above."""
    op.drop_index("ix_cause_images_owner_id", table_name="cause_images")
    op.drop_table("cause_images")
    op.drop_index("ix_contribution_images_owner_id", table_name="contribution_images")
    op.drop_table("contribution_images")
    op.drop_table("causes")
    op.drop_index("ix_contributions_member_id", table_name="contributions")
    op.drop_table("contributions")
    op.drop_index("ix_secret_tokens_active", table_name="secret_tokens")
    op.drop_index("ix_secret_tokens_token_hash", table_name="secret_tokens")
    op.drop_index("ix_secret_tokens_member_id", table_name="secret_tokens")
    op.drop_table("secret_tokens")
    sa.Enum(name="secret_token_kind").drop(op.get_bind(), checkfirst=True)
    op.drop_index("ix_members_email", table_name="members")
    op.drop_table("members")
