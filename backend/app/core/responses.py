"""Response Envelope: status markers, user-facing messages, and envelope builders.

Invariants:
    - Every success body carries `status` and `pesan`; `data` is present for
      list/get/create/update and absent for delete
    - An empty list uses the EMPTY marker, never NOT_FOUND
    - Builders are pure: no IO, no framework imports

Design Decisions:
    - Indonesian wording kept verbatim: existing clients match on these strings
"""

from enum import Enum
from typing import Any


class ResponseStatus(str, Enum):
    """The `status` discriminator of the envelope."""
    SUCCESS = "sukses"
    EMPTY = "data kosong"
    NOT_FOUND = "data tidak ada"
    VALIDATION_FAILED = "validasi gagal"
    ERROR = "error"


MSG_FETCHED = "Data mahasiswa berhasil diambil."
MSG_EMPTY = "Tidak ada data mahasiswa."
MSG_CREATED = "Data mahasiswa berhasil ditambahkan."
MSG_UPDATED = "Data mahasiswa berhasil diperbarui."
MSG_DELETED = "Data mahasiswa berhasil dihapus."
MSG_NOT_FOUND = "Data mahasiswa tidak ditemukan."
MSG_VALIDATION_FAILED = "Validasi gagal."
MSG_TOKEN_INVALID = "Token tidak valid atau tidak disertakan."
MSG_INTERNAL_ERROR = "Terjadi kesalahan pada server."
MSG_SERVICE_UNAVAILABLE = "Layanan basis data tidak tersedia."

# field rule messages
MSG_FIELD_REQUIRED = "Kolom {field} wajib diisi."
MSG_FIELD_TOO_LONG = "Kolom {field} maksimal {max_length} karakter."
MSG_FIELD_NOT_STRING = "Kolom {field} harus berupa teks."
MSG_NIM_TAKEN = "NIM sudah digunakan."


def success(pesan: str, data: Any = None) -> dict:
    """Build a `sukses` envelope; `data` is omitted when None."""
    body: dict[str, Any] = {
        "status": ResponseStatus.SUCCESS.value,
        "pesan": pesan,
    }
    if data is not None:
        body["data"] = data
    return body


def collection(items: list) -> dict:
    """Envelope for a list result: EMPTY marker when there are no items."""
    if not items:
        return {
            "status": ResponseStatus.EMPTY.value,
            "pesan": MSG_EMPTY,
            "data": [],
        }
    return success(MSG_FETCHED, items)


def failure(status: ResponseStatus, pesan: str) -> dict:
    return {"status": status.value, "pesan": pesan}
