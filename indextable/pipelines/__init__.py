"""Entry points that orchestrate loading and indexing."""

from .indexing import IndexingResult, lookup_keys, run_indexing  # noqa: F401
