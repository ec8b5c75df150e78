"""
Build-once index tables.

Modules are grouped into data access (indexers, streams, loaders), pipelines,
and utilities so scripts can stay thin.
"""

from .data.indexers import (  # noqa: F401
    NOT_FOUND,
    IndexHashTable,
    UniquenessViolation,
    build_index_table,
)
