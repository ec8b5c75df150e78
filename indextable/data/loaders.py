"""
Loading helpers that turn raw files into index tables.

Values are read either one per line from a plain text file or from a single
column of a CSV file, then handed to `build_index_table`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pandas as pd
from loguru import logger

from .indexers import DEFAULT_LOAD_FACTOR, IndexHashTable, build_index_table
from .streams import ObjectStream, PlainTextByLineStream


def read_lines(
    stream: ObjectStream[str], *, skip_blank: bool = True, strip: bool = True
) -> list[str]:
    """Drain ``stream`` into a list, optionally stripping and skipping blank lines."""
    lines: list[str] = []
    for line in stream:
        if strip:
            line = line.strip()
        if skip_blank and not line:
            continue
        lines.append(line)
    return lines


def load_lines(
    path: Path, *, encoding: str = "utf-8", skip_blank: bool = True
) -> list[str]:
    """
    Load one value per line from a plain text file.

    Parameters
    ----------
    path:
        Text file such as a vocabulary, feature or outcome list.
    """
    with PlainTextByLineStream.from_path(path, encoding) as stream:
        return read_lines(stream, skip_blank=skip_blank)


def load_column_values(
    path: Path, column: str, *, limit: Optional[int] = None
) -> list[str]:
    """
    Load the non-missing values of one CSV column as strings.

    Parameters
    ----------
    path:
        CSV file with a header row.
    column:
        Header name of the column to read.
    limit:
        Optional maximum number of rows to read.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Expected CSV at {path} but file was not found.")
    frame = pd.read_csv(path, dtype="string", nrows=limit)
    if column not in frame.columns:
        raise KeyError(f"Column '{column}' missing from {path}")

    values = frame[column].dropna()
    missing = len(frame) - len(values)
    if missing > 0:
        logger.info("Skipped {} rows with missing '{}' values.", missing, column)
    return values.astype(str).tolist()


def load_index_table(
    path: Path,
    *,
    column: str | None = None,
    encoding: str = "utf-8",
    load_factor: float = DEFAULT_LOAD_FACTOR,
    deduplicate: bool = False,
    limit: Optional[int] = None,
) -> IndexHashTable[str]:
    """
    Convenience wrapper that reads values from disk and indexes them.

    CSV input is used when ``column`` is given, otherwise the file is read line
    by line.
    """
    if column is not None:
        values = load_column_values(path, column, limit=limit)
    else:
        values = load_lines(path, encoding=encoding)
        if limit is not None:
            values = values[:limit]

    if not values:
        logger.warning("No values found in {}; the index table will be empty.", path)
    return build_index_table(values, load_factor=load_factor, deduplicate=deduplicate)
