"""Mahasiswa Schemas: field rules for create/update bodies and the record shape.

Invariants:
    - MahasiswaCreate: all four fields present, non-null, non-blank after strip
    - MahasiswaUpdate: every field optional; a supplied field obeys the create rules
    - Numbers coerced to strings (clients send nim as a JSON number)
    - Unknown keys ignored, never forwarded
    - MahasiswaRead is the `data` payload shape for a single record

Design Decisions:
    - Typed partial update over merging the raw payload: only declared columns can change
    - Explicit null on update rejected (null_not_allowed) instead of clearing a required column
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from app.models.mahasiswa import NIM_MAX_LENGTH, TEXT_MAX_LENGTH

MAHASISWA_FIELDS = ("nim", "nama_mahasiswa", "fakultas", "jurusan")

_INPUT_CONFIG = ConfigDict(
    str_strip_whitespace=True,
    coerce_numbers_to_str=True,
    extra="ignore",
)


class MahasiswaCreate(BaseModel):
    """Create body: every field required."""
    model_config = _INPUT_CONFIG

    nim: str = Field(min_length=1, max_length=NIM_MAX_LENGTH, examples=["12345678"])
    nama_mahasiswa: str = Field(min_length=1, max_length=TEXT_MAX_LENGTH, examples=["Rizal"])
    fakultas: str = Field(min_length=1, max_length=TEXT_MAX_LENGTH, examples=["Teknik"])
    jurusan: str = Field(min_length=1, max_length=TEXT_MAX_LENGTH, examples=["Informatika"])


class MahasiswaUpdate(BaseModel):
    """Update body: any subset of the create fields."""
    model_config = _INPUT_CONFIG

    nim: str | None = Field(None, min_length=1, max_length=NIM_MAX_LENGTH)
    nama_mahasiswa: str | None = Field(
        None, min_length=1, max_length=TEXT_MAX_LENGTH, examples=["Rizal Baru"],
    )
    fakultas: str | None = Field(
        None, min_length=1, max_length=TEXT_MAX_LENGTH, examples=["Ekonomi"],
    )
    jurusan: str | None = Field(
        None, min_length=1, max_length=TEXT_MAX_LENGTH, examples=["Manajemen"],
    )

    @field_validator(*MAHASISWA_FIELDS, mode="before")
    @classmethod
    def reject_explicit_null(cls, v):
        # defaults are not validated, so this only sees values the client sent
        if v is None:
            raise PydanticCustomError("null_not_allowed", "Field cannot be null")
        return v

    def changes(self) -> dict[str, str]:
        """Fields the client actually supplied."""
        return self.model_dump(exclude_unset=True)


class MahasiswaRead(BaseModel):
    """Single record as returned in `data`."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    nim: str
    nama_mahasiswa: str
    fakultas: str
    jurusan: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


# --- Envelopes (OpenAPI documentation only) -----------------------------------

class MahasiswaEnvelope(BaseModel):
    status: str
    pesan: str
    data: MahasiswaRead


class MahasiswaListEnvelope(BaseModel):
    status: str
    pesan: str
    data: list[MahasiswaRead]


class MessageEnvelope(BaseModel):
    status: str
    pesan: str
