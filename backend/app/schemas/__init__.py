"""Pydantic Schemas — form validation and response shapes at the API boundary.

Invariants:
    - Schemas validate at the system boundary (form posts, responses)
    - Domain types from core/ used for enum fields

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
