"""Services Layer: persistence operations behind the routes.

Invariants:
    - Services raise core errors (app/core/errors.py), never HTTP exceptions
"""
