"""Mahasiswa API Package: student record CRUD behind a bearer-token gate.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
