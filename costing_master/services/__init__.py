"""Services Layer — command/query handlers orchestrating core + repositories.

Invariants:
    - One handler class per operation per entity; handlers hold only their repository
    - Value objects are built before any repository call
    - Errors propagate unchanged; translation happens in the api/ adapters

Design Decisions:
    - Imperative shell around the pure core: handlers await IO, entities stay sync
"""
