"""Create mahasiswas table.

Revision ID: 001_mahasiswas
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_mahasiswas"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "mahasiswas",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("nim", sa.String(50), nullable=False),
        sa.Column("nama_mahasiswa", sa.String(255), nullable=False),
        sa.Column("fakultas", sa.String(255), nullable=False),
        sa.Column("jurusan", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("nim", name="uq_mahasiswas_nim"),
    )


def downgrade() -> None:
    op.drop_table("mahasiswas")
