"""ORM Models — SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - Imported here so create_schema sees every table on Base.metadata
"""

from translator.models.storage_item import StorageItem  # noqa: F401
