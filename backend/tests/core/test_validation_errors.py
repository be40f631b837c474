"""Pydantic error translation: field names and Indonesian messages."""

import pytest
from pydantic import ValidationError

from app.api.error_handlers import build_validation_error
from app.schemas.mahasiswa import MahasiswaCreate


def _errors_for(payload: dict) -> dict:
    with pytest.raises(ValidationError) as exc_info:
        MahasiswaCreate.model_validate(payload)
    # FastAPI prefixes body errors with "body"
    errors = [
        {**e, "loc": ("body", *e["loc"])} for e in exc_info.value.errors()
    ]
    return build_validation_error(errors).errors


def test_missing_fields_each_reported():
    errors = _errors_for({"nim": "1"})
    assert set(errors) == {"nama_mahasiswa", "fakultas", "jurusan"}
    assert errors["jurusan"] == ["Kolom jurusan wajib diisi."]


def test_null_is_reported_as_required():
    errors = _errors_for({
        "nim": None, "nama_mahasiswa": "A", "fakultas": "B", "jurusan": "C",
    })
    assert errors == {"nim": ["Kolom nim wajib diisi."]}


def test_too_long_reports_limit():
    errors = _errors_for({
        "nim": "1" * 51, "nama_mahasiswa": "A", "fakultas": "B", "jurusan": "C",
    })
    assert errors == {"nim": ["Kolom nim maksimal 50 karakter."]}


def test_non_string_reported():
    errors = _errors_for({
        "nim": ["1"], "nama_mahasiswa": "A", "fakultas": "B", "jurusan": "C",
    })
    assert errors == {"nim": ["Kolom nim harus berupa teks."]}


def test_whole_body_error_keyed_as_body():
    errors = build_validation_error([
        {"loc": ("body",), "type": "missing", "msg": "Field required", "input": None},
    ]).errors
    assert errors == {"body": ["Kolom body wajib diisi."]}
