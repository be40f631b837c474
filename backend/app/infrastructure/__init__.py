"""Infrastructure Layer: database session management and structured logging.

Invariants:
    - Infrastructure never imports route modules
    - All SQLAlchemy failures mapped to core error types before leaving this layer
"""
