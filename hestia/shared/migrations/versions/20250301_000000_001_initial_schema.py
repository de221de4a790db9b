# pylint: skip-file
# ruff: noqa
"""Initial schema - profiles, artisans, gallery images

Revision ID: 001
Revises:
Create Date: 2025-03-01 00:00:00

Tables created:
- profiles: Base profile of every user (display name, role)
- artisans: Artisan profile, one per user (draft / published / unpublished)
- gallery_images: Normalized gallery images of an artisan

Enums created:
- profilerole: community_member, artisan, admin
- artisanstatus: draft, published, unpublished
- contactchannel: email, phone, instagram, whatsapp, telegram, website
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


# Enum types
profile_role_enum = postgresql.ENUM(
    "community_member",
    "artisan",
    "admin",
    name="profilerole",
    create_type=False,
)

artisan_status_enum = postgresql.ENUM(
    "draft",
    "published",
    "unpublished",
    name="artisanstatus",
    create_type=False,
)

contact_channel_enum = postgresql.ENUM(
    "email",
    "phone",
    "instagram",
    "whatsapp",
    "telegram",
    "website",
    name="contactchannel",
    create_type=False,
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade database schema."""
    op.execute("CREATE TYPE profilerole AS ENUM ('community_member', 'artisan', 'admin')")
    op.execute("CREATE TYPE artisanstatus AS ENUM ('draft', 'published', 'unpublished')")
    op.execute(
        "CREATE TYPE contactchannel AS ENUM "
        "('email', 'phone', 'instagram', 'whatsapp', 'telegram', 'website')"
    )

    # Create profiles table (id is the identity provider's user id)
    op.create_table(
        "profiles",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("full_name", sa.String(120), nullable=True),
        sa.Column("role", profile_role_enum, nullable=False, server_default="community_member"),
        *_timestamps(),
    )

    # Create artisans table
    op.create_table(
        "artisans",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("status", artisan_status_enum, nullable=False, server_default="draft"),
        sa.Column("craft_type", sa.String(100), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("location", sa.String(100), nullable=True),
        sa.Column("contact_channel", contact_channel_enum, nullable=False, server_default="instagram"),
        sa.Column("contact_value", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("instagram", sa.String(64), nullable=True),
        sa.Column("whatsapp_url", sa.String(255), nullable=True),
        sa.Column("telegram", sa.String(64), nullable=True),
        sa.Column("external_shop_url", sa.String(255), nullable=True),
        sa.Column("accepting_orders", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("hours", postgresql.JSONB(), nullable=True),
        sa.Column("tags", postgresql.JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    # One artisan record per user; concurrent draft creation relies on it
    op.create_index("ix_artisans_user_id", "artisans", ["user_id"], unique=True)
    op.create_index("ix_artisans_status", "artisans", ["status"])

    # Create gallery_images table
    op.create_table(
        "gallery_images",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "artisan_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("artisans.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("image_url", sa.Text(), nullable=False),
        sa.Column("storage_path", sa.Text(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_gallery_images_artisan_id", "gallery_images", ["artisan_id"])
    op.create_index(
        "ix_gallery_images_artisan_featured",
        "gallery_images",
        ["artisan_id"],
        postgresql_where=sa.text("is_featured"),
    )


def downgrade() -> None:
    """Downgrade database schema."""
    # Drop tables in reverse order (respect foreign keys)
    op.drop_index("ix_gallery_images_artisan_featured", table_name="gallery_images")
    op.drop_index("ix_gallery_images_artisan_id", table_name="gallery_images")
    op.drop_table("gallery_images")
    op.drop_index("ix_artisans_status", table_name="artisans")
    op.drop_index("ix_artisans_user_id", table_name="artisans")
    op.drop_table("artisans")
    op.drop_table("profiles")

    # Drop enum types
    op.execute("DROP TYPE IF EXISTS contactchannel")
    op.execute("DROP TYPE IF EXISTS artisanstatus")
    op.execute("DROP TYPE IF EXISTS profilerole")
