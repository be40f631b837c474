"""API Layer: FastAPI routes, token gate, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return envelope JSON responses
"""
