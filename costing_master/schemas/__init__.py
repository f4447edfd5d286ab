"""Pydantic Schemas — request/response messages for the boundary adapters.

Invariants:
    - Schemas validate at system boundary (shape, lengths); domain rules live in core/
    - Enum fields use wire names (UOM_CATEGORY_WEIGHT, ...) mapped via enum_mapping

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
