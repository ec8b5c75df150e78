"""Index tables and the readers that feed them."""

from .indexers import (  # noqa: F401
    DEFAULT_LOAD_FACTOR,
    NOT_FOUND,
    IndexHashTable,
    UniquenessViolation,
    build_index_table,
    unique_in_order,
)
from .loaders import load_column_values, load_index_table, load_lines, read_lines  # noqa: F401
from .streams import ObjectStream, PlainTextByLineStream  # noqa: F401
