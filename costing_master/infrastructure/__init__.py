"""Infrastructure Layer — persistence, caching, rate limiting and logging.

Invariants:
    - Implements the Protocols in core/repository_protocols.py; core never imports from here
    - Storage and cache failures leave this layer as CostingError subclasses only

Design Decisions:
    - Module-level singletons (db_manager, cache_backend, rate_limiter) initialized
      once by the FastAPI lifespan
"""
