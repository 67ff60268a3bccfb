"""Create translations table."""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3d4e5f6a7b8c"
down_revision: Union[str, Sequence[str], None] = "2c3d4e5f6a7b"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create translations table."""
    op.create_table(
        "translations",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("caption_id", sa.Integer(), nullable=False),
        sa.Column("author_id", sa.Integer(), nullable=True),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["caption_id"], ["captions.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_translations_id"), "translations", ["id"], unique=False)
    op.create_index(op.f("ix_translations_caption_id"), "translations", ["caption_id"], unique=False)
    op.create_index(op.f("ix_translations_author_id"), "translations", ["author_id"], unique=False)


def downgrade() -> None:
    """Drop translations table."""
    op.drop_index(op.f("ix_translations_author_id"), table_name="translations")
    op.drop_index(op.f("ix_translations_caption_id"), table_name="translations")
    op.drop_index(op.f("ix_translations_id"), table_name="translations")
    op.drop_table("translations")
