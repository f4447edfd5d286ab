"""API Layer — FastAPI routes, boundary adapters, error handlers, and middleware.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every master-data endpoint returns the response envelope, success or failure

Design Decisions:
    - Thin routes delegate to the request handlers (uom_adapter, parameter_adapter)
"""
