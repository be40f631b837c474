"""Pydantic Schemas: request/response validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (request bodies, response data)
    - Unknown request keys never reach the ORM layer

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
