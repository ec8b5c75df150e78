"""
Indexing orchestration entry point.

Couples value loading, optional de-duplication and table construction so the
CLI script stays thin while the flow remains testable.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Hashable, Iterable, Mapping

from loguru import logger

from ..data.indexers import NOT_FOUND, IndexHashTable
from ..data.loaders import load_index_table
from ..utils.config import IndexConfig, get_by_dotted_path


@dataclass(frozen=True)
class IndexingResult:
    config: Mapping[str, Any]
    source: Path
    table: IndexHashTable
    runtime_seconds: float


def run_indexing(config: Mapping[str, Any]) -> IndexingResult:
    """
    Build an index table from the `data` and `index` config sections.

    ``data.path`` names the input file; ``data.column`` switches to CSV input.
    """
    path = get_by_dotted_path(config, "data.path")
    if path is None:
        raise ValueError("Configuration is missing 'data.path'.")
    source = Path(path)
    column = get_by_dotted_path(config, "data.column")
    encoding = str(get_by_dotted_path(config, "data.encoding") or "utf-8")
    limit = get_by_dotted_path(config, "data.limit")
    if limit is not None:
        limit = int(limit)

    index_config = IndexConfig.from_mapping(get_by_dotted_path(config, "index"))

    start_time = time.time()
    logger.info("Loading values from {}", source)
    table = load_index_table(
        source,
        column=column,
        encoding=encoding,
        load_factor=index_config.load_factor,
        deduplicate=index_config.deduplicate,
        limit=limit,
    )
    runtime = time.time() - start_time
    logger.info(
        "Indexed {} values | capacity={} load_factor={} | {:.3f}s",
        table.size(),
        table.capacity,
        table.load_factor,
        runtime,
    )
    return IndexingResult(
        config=config, source=source, table=table, runtime_seconds=runtime
    )


def lookup_keys(table: IndexHashTable, keys: Iterable[Hashable]) -> dict[Hashable, int]:
    """Resolve ``keys`` against ``table``; misses map to `NOT_FOUND`."""
    results = {key: table.get(key) for key in keys}
    misses = sum(1 for index in results.values() if index == NOT_FOUND)
    if misses:
        logger.debug("{} of {} keys not present in the index table", misses, len(results))
    return results
