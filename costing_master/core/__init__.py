"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Value objects and entities raise CostingError subclasses, never return sentinels

Design Decisions:
    - Functional core separated from imperative shell: handlers in services/ own the IO
"""
