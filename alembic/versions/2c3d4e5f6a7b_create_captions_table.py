"""Create captions table."""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "2c3d4e5f6a7b"
down_revision: Union[str, Sequence[str], None] = "1b2c3d4e5f6a"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create captions table."""
    op.create_table(
        "captions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("document_id", sa.Integer(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("start_time", sa.Integer(), nullable=False),
        sa.Column("end_time", sa.Integer(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["document_id"], ["documents.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("document_id", "position", name="uq_captions_document_position"),
    )
    op.create_index(op.f("ix_captions_id"), "captions", ["id"], unique=False)
    op.create_index(op.f("ix_captions_document_id"), "captions", ["document_id"], unique=False)


def downgrade() -> None:
    """Drop captions table."""
    op.drop_index(op.f("ix_captions_document_id"), table_name="captions")
    op.drop_index(op.f("ix_captions_id"), table_name="captions")
    op.drop_table("captions")
