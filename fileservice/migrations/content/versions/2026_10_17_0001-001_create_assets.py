"""Create assets table

Adds:
- assets (file blob, media type, unique file name, description, type id)

Revision ID: 001
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "assets",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False, comment="Asset identifier"),
        sa.Column("type_id", sa.Integer(), nullable=False, comment="Asset type classifier"),
        sa.Column("description", sa.Text(), nullable=False, comment="Free text description"),
        sa.Column("file_name", sa.String(255), nullable=False, comment="File name, unique across all assets"),
        sa.Column("media_type", sa.String(255), nullable=False, comment="MIME type of the content"),
        sa.Column("content", sa.LargeBinary(), nullable=True, comment="File content"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_assets_file_name", "assets", ["file_name"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_assets_file_name", table_name="assets")
    op.drop_table("assets")
