"""ORM Models: SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every model is imported here so Base.metadata is complete for create_all/Alembic
"""

from app.models.mahasiswa import Mahasiswa  # noqa: F401
