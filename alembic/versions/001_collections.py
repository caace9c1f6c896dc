"""Collections, collection permissions and collection books.

The users and books tables belong to the identity and catalog layers and
must exist before this revision runs.

Revision ID: 001
Revises:
Create Date: 2025-08-25

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "collections",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("owner_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("length(btrim(name)) > 0", name="ck_collections_name_not_blank"),
    )
    op.create_index("ux_collections_owner_name", "collections", ["owner_id", "name"], unique=True)
    op.create_index("ix_collections_public_created", "collections", ["is_public", "created_at"])
    op.create_index("ix_collections_updated_at", "collections", ["updated_at"])

    op.create_table(
        "collection_books",
        sa.Column(
            "collection_id",
            sa.Integer(),
            sa.ForeignKey("collections.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "book_id",
            sa.Integer(),
            sa.ForeignKey("books.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("added_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("added_by", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
    )
    op.create_index("ix_collection_books_book", "collection_books", ["book_id"])
    op.create_index("ix_collection_books_added_at", "collection_books", ["collection_id", "added_at"])

    op.create_table(
        "collection_permissions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "collection_id",
            sa.Integer(),
            sa.ForeignKey("collections.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("permission_type", sa.String(20), nullable=False),
        sa.Column("granted_by", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("granted_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "permission_type IN ('view', 'add_books', 'edit', 'admin')",
            name="ck_collection_permissions_type",
        ),
        sa.UniqueConstraint("collection_id", "user_id", name="uq_collection_permissions_collection_user"),
    )
    op.create_index("ix_collection_permissions_user", "collection_permissions", ["user_id"])


def downgrade() -> None:
    op.drop_table("collection_permissions")
    op.drop_table("collection_books")
    op.drop_table("collections")
