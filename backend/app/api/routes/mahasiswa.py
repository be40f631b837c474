"""Mahasiswa Routes: list, create, get, update, delete student records.

Invariants:
    - Every response body is an envelope: status + pesan (+ data)
    - Non-integer or out-of-range ids behave like unknown ids (404)
    - Routes shape responses only; MahasiswaStore owns persistence and uniqueness
    - Router carries no prefix: main.py mounts it under /api/students and /api/mahasiswa
"""

import logging
import re

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ErrorContext, ResourceNotFoundError
from app.core.responses import (
    success, collection,
    MSG_FETCHED, MSG_CREATED, MSG_UPDATED, MSG_DELETED,
)
from app.infrastructure.database import get_db
from app.models.mahasiswa import ID_MAX, Mahasiswa
from app.schemas.mahasiswa import (
    MahasiswaCreate, MahasiswaUpdate, MahasiswaRead,
    MahasiswaEnvelope, MahasiswaListEnvelope, MessageEnvelope,
)
from app.services.mahasiswa_store import MahasiswaStore

logger = logging.getLogger(__name__)

# Documents the bearer requirement in OpenAPI; the token gate enforces it.
bearer_scheme = HTTPBearer(auto_error=False)

router = APIRouter(tags=["Mahasiswa"], dependencies=[Depends(bearer_scheme)])

_ERROR_RESPONSES = {
    401: {"description": "Token tidak valid atau tidak disertakan"},
}
_NOT_FOUND = {404: {"description": "Data tidak ditemukan"}}
_INVALID = {400: {"description": "Validasi gagal"}}

_ID_PATTERN = re.compile(r"[0-9]+")


def get_store(db: AsyncSession = Depends(get_db)) -> MahasiswaStore:
    return MahasiswaStore(db)


def parse_id(mahasiswa_id: str) -> int:
    """Path id as int; anything no row could have is a missing record.

    Only ASCII digits count: int() alone would also take padding, `_`
    separators and non-ASCII digits.
    """
    if _ID_PATTERN.fullmatch(mahasiswa_id):
        value = int(mahasiswa_id)
        if value <= ID_MAX:
            return value
    raise ResourceNotFoundError(mahasiswa_id, ErrorContext())


def serialize(mahasiswa: Mahasiswa) -> dict:
    return MahasiswaRead.model_validate(mahasiswa).model_dump(mode="json")


@router.get(
    "", response_model=MahasiswaListEnvelope,
    summary="Ambil semua data mahasiswa", responses=_ERROR_RESPONSES,
)
async def list_mahasiswa(store: MahasiswaStore = Depends(get_store)):
    records = await store.list_all()
    return collection([serialize(m) for m in records])


@router.post(
    "", response_model=MahasiswaEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Tambah data mahasiswa",
    responses={**_ERROR_RESPONSES, **_INVALID},
)
async def create_mahasiswa(
    body: MahasiswaCreate, store: MahasiswaStore = Depends(get_store),
):
    mahasiswa = await store.create(body)
    return success(MSG_CREATED, serialize(mahasiswa))


@router.get(
    "/{mahasiswa_id}", response_model=MahasiswaEnvelope,
    summary="Ambil data mahasiswa berdasarkan ID",
    responses={**_ERROR_RESPONSES, **_NOT_FOUND},
)
async def get_mahasiswa(
    mahasiswa_id: str, store: MahasiswaStore = Depends(get_store),
):
    mahasiswa = await store.get(parse_id(mahasiswa_id))
    return success(MSG_FETCHED, serialize(mahasiswa))


@router.put(
    "/{mahasiswa_id}", response_model=MahasiswaEnvelope,
    summary="Perbarui data mahasiswa",
    responses={**_ERROR_RESPONSES, **_NOT_FOUND, **_INVALID},
)
@router.patch(
    "/{mahasiswa_id}", response_model=MahasiswaEnvelope,
    include_in_schema=False,
)
async def update_mahasiswa(
    mahasiswa_id: str,
    body: MahasiswaUpdate | None = None,
    store: MahasiswaStore = Depends(get_store),
):
    """Overwrite supplied fields; omitted fields keep their values."""
    mahasiswa = await store.update(
        parse_id(mahasiswa_id), body or MahasiswaUpdate(),
    )
    return success(MSG_UPDATED, serialize(mahasiswa))


@router.delete(
    "/{mahasiswa_id}", response_model=MessageEnvelope,
    summary="Hapus data mahasiswa",
    responses={**_ERROR_RESPONSES, **_NOT_FOUND},
)
async def delete_mahasiswa(
    mahasiswa_id: str, store: MahasiswaStore = Depends(get_store),
):
    await store.delete(parse_id(mahasiswa_id))
    return success(MSG_DELETED)
