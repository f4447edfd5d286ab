"""ORM Models — SQLAlchemy declarative models for the master tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - ORM rows never leave infrastructure/: repositories convert them to entities

Design Decisions:
    - One file per table for locality
    - All models imported here so Base.metadata is complete before create_all / alembic
"""

from costing_master.models.uom import UOMModel  # noqa: F401
from costing_master.models.parameter import ParameterModel  # noqa: F401
