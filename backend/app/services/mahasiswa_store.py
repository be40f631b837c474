"""Mahasiswa Store: CRUD over the mahasiswas table with field-level validation.

Invariants:
    - nim uniqueness pre-checked before insert/update (field error on nim)
    - A unique-constraint violation at commit is reported as the same field error
    - delete is one conditional DELETE: zero rows affected -> ResourceNotFoundError
    - update that loses its row before flush -> ResourceNotFoundError, nothing persisted
    - Every failure rolls the session back before raising

Design Decisions:
    - Create and update share the nim rule: a changed nim is re-checked, excluding the record itself
    - Store raises core errors; routes only shape envelopes
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from app.core.errors import (
    ErrorContext, ResourceNotFoundError, ValidationFailedError,
)
from app.core.responses import MSG_NIM_TAKEN
from app.models.mahasiswa import Mahasiswa
from app.schemas.mahasiswa import MahasiswaCreate, MahasiswaUpdate

logger = logging.getLogger(__name__)


class MahasiswaStore:
    """Persistence operations for student records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> list[Mahasiswa]:
        result = await self.db.execute(select(Mahasiswa).order_by(Mahasiswa.id))
        return list(result.scalars().all())

    async def get(self, mahasiswa_id: int) -> Mahasiswa:
        """Fetch by id or raise ResourceNotFoundError."""
        mahasiswa = await self.db.get(Mahasiswa, mahasiswa_id)
        if mahasiswa is None:
            raise ResourceNotFoundError(
                mahasiswa_id, ErrorContext(mahasiswa_id=mahasiswa_id),
            )
        return mahasiswa

    async def create(self, body: MahasiswaCreate) -> Mahasiswa:
        await self._ensure_nim_available(body.nim)
        mahasiswa = Mahasiswa(**body.model_dump())
        self.db.add(mahasiswa)
        await self._commit_or_nim_taken()
        await self.db.refresh(mahasiswa)
        logger.info(
            f"Mahasiswa {mahasiswa.id} created",
            extra={"mahasiswa_id": mahasiswa.id},
        )
        return mahasiswa

    async def update(self, mahasiswa_id: int, body: MahasiswaUpdate) -> Mahasiswa:
        """Overwrite only the supplied fields."""
        mahasiswa = await self.get(mahasiswa_id)
        changes = body.changes()
        if not changes:
            return mahasiswa

        new_nim = changes.get("nim")
        if new_nim is not None and new_nim != mahasiswa.nim:
            await self._ensure_nim_available(new_nim, exclude_id=mahasiswa_id)

        for field_name, value in changes.items():
            setattr(mahasiswa, field_name, value)
        mahasiswa.updated_at = datetime.now(timezone.utc)

        try:
            await self._commit_or_nim_taken()
        except StaleDataError:
            # row deleted between lookup and flush
            await self.db.rollback()
            raise ResourceNotFoundError(
                mahasiswa_id, ErrorContext(mahasiswa_id=mahasiswa_id),
            )
        logger.info(
            f"Mahasiswa {mahasiswa_id} updated: {sorted(changes)}",
            extra={"mahasiswa_id": mahasiswa_id},
        )
        return mahasiswa

    async def delete(self, mahasiswa_id: int) -> None:
        result = await self.db.execute(
            delete(Mahasiswa).where(Mahasiswa.id == mahasiswa_id),
        )
        if result.rowcount == 0:
            await self.db.rollback()
            raise ResourceNotFoundError(
                mahasiswa_id, ErrorContext(mahasiswa_id=mahasiswa_id),
            )
        await self.db.commit()
        logger.info(
            f"Mahasiswa {mahasiswa_id} deleted",
            extra={"mahasiswa_id": mahasiswa_id},
        )

    # ─── helpers ────────────────────────────────────────────────

    async def _ensure_nim_available(
        self, nim: str, exclude_id: int | None = None,
    ) -> None:
        query = select(Mahasiswa.id).where(Mahasiswa.nim == nim)
        if exclude_id is not None:
            query = query.where(Mahasiswa.id != exclude_id)
        result = await self.db.execute(query.limit(1))
        if result.scalar_one_or_none() is not None:
            raise ValidationFailedError.for_field("nim", MSG_NIM_TAKEN)

    async def _commit_or_nim_taken(self) -> None:
        """Commit; a unique violation (concurrent insert of the same nim) becomes a field error."""
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Integrity error on commit: {e.orig}")
            raise ValidationFailedError.for_field("nim", MSG_NIM_TAKEN)
