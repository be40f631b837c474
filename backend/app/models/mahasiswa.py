"""Mahasiswa ORM: persists one student record per row.

Invariants:
    - id is an autoincrement integer primary key in 1..ID_MAX, never reassigned
    - nim is unique across all rows (uq_mahasiswas_nim)
    - nim, nama_mahasiswa, fakultas, jurusan are non-nullable
    - updated_at refreshed on every UPDATE
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base

NIM_MAX_LENGTH = 50
TEXT_MAX_LENGTH = 255
# Integer maps to int4 on PostgreSQL
ID_MAX = 2**31 - 1


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Mahasiswa(Base):
    """Student record."""
    __tablename__ = "mahasiswas"
    __table_args__ = (
        UniqueConstraint("nim", name="uq_mahasiswas_nim"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    nim: Mapped[str] = mapped_column(
        String(NIM_MAX_LENGTH), nullable=False,
    )
    nama_mahasiswa: Mapped[str] = mapped_column(
        String(TEXT_MAX_LENGTH), nullable=False,
    )
    fakultas: Mapped[str] = mapped_column(
        String(TEXT_MAX_LENGTH), nullable=False,
    )
    jurusan: Mapped[str] = mapped_column(
        String(TEXT_MAX_LENGTH), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )

    def __repr__(self) -> str:
        return f"<Mahasiswa id={self.id} nim={self.nim!r}>"
