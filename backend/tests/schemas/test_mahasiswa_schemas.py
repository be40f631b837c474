"""Mahasiswa schemas: create requires all fields, update accepts any subset.

Invariants:
    - Strings are stripped; blank after strip is invalid
    - Update reports only the fields the client supplied
    - Unknown keys never appear in dumps
"""

import pytest
from pydantic import ValidationError

from app.schemas.mahasiswa import MahasiswaCreate, MahasiswaRead, MahasiswaUpdate

VALID = {
    "nim": "12345678",
    "nama_mahasiswa": "Rizal",
    "fakultas": "Teknik",
    "jurusan": "Informatika",
}


def test_create_accepts_full_record():
    body = MahasiswaCreate(**VALID)
    assert body.model_dump() == VALID


def test_create_strips_whitespace():
    body = MahasiswaCreate(**{**VALID, "jurusan": "  Informatika  "})
    assert body.jurusan == "Informatika"


@pytest.mark.parametrize("field", list(VALID))
def test_create_rejects_blank(field):
    with pytest.raises(ValidationError):
        MahasiswaCreate(**{**VALID, field: "   "})


def test_create_coerces_numeric_nim():
    assert MahasiswaCreate(**{**VALID, "nim": 12345678}).nim == "12345678"


def test_create_drops_unknown_keys():
    body = MahasiswaCreate(**VALID, id=5, role="admin")
    assert "id" not in body.model_dump()
    assert "role" not in body.model_dump()


def test_update_changes_only_supplied():
    body = MahasiswaUpdate(fakultas="Ekonomi")
    assert body.changes() == {"fakultas": "Ekonomi"}


def test_update_empty_has_no_changes():
    assert MahasiswaUpdate().changes() == {}


def test_update_rejects_explicit_null():
    with pytest.raises(ValidationError) as exc_info:
        MahasiswaUpdate(fakultas=None)
    assert exc_info.value.errors()[0]["type"] == "null_not_allowed"


def test_update_rejects_blank():
    with pytest.raises(ValidationError):
        MahasiswaUpdate(nim=" ")


def test_update_ignores_unknown_keys():
    body = MahasiswaUpdate.model_validate({"id": 3, "jurusan": "Manajemen"})
    assert body.changes() == {"jurusan": "Manajemen"}


def test_read_from_attributes():
    class _Row:
        id = 1
        nim = "1"
        nama_mahasiswa = "A"
        fakultas = "B"
        jurusan = "C"
        created_at = None
        updated_at = None

    read = MahasiswaRead.model_validate(_Row())
    assert read.model_dump()["id"] == 1
