from pathlib import Path

import pytest

from indextable.data.indexers import NOT_FOUND, UniquenessViolation
from indextable.data.loaders import (
    load_column_values,
    load_index_table,
    load_lines,
    read_lines,
)
from indextable.data.streams import PlainTextByLineStream


def test_read_lines_strips_and_skips_blank(tmp_path: Path) -> None:
    source = tmp_path / "values.txt"
    source.write_text("  a \n\nb\n   \nc\n", encoding="utf-8")

    with PlainTextByLineStream.from_path(source) as stream:
        assert read_lines(stream) == ["a", "b", "c"]
        stream.reset()
        assert read_lines(stream, skip_blank=False, strip=False) == ["  a ", "", "b", "   ", "c"]


def test_load_lines_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_lines(tmp_path / "missing.txt")


def test_load_column_values_reads_strings(tmp_path: Path) -> None:
    source = tmp_path / "outcomes.csv"
    source.write_text("label,count\npositive,3\nnegative,1\n,2\n007,5\n", encoding="utf-8")

    assert load_column_values(source, "label") == ["positive", "negative", "007"]
    assert load_column_values(source, "label", limit=2) == ["positive", "negative"]

    with pytest.raises(KeyError):
        load_column_values(source, "missing")


def test_load_column_values_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_column_values(tmp_path / "missing.csv", "label")


def test_load_index_table_from_lines(tmp_path: Path) -> None:
    source = tmp_path / "vocabulary.txt"
    source.write_text("the\nof\nand\nof\n", encoding="utf-8")

    with pytest.raises(UniquenessViolation):
        load_index_table(source)

    table = load_index_table(source, deduplicate=True)
    assert table.to_array() == ["the", "of", "and"]
    assert table.get("and") == 2
    assert table.get("unseen") == NOT_FOUND

    limited = load_index_table(source, limit=2, load_factor=0.5)
    assert limited.size() == 2
    assert limited.load_factor == 0.5


def test_load_index_table_from_csv_column(tmp_path: Path) -> None:
    source = tmp_path / "features.csv"
    source.write_text("feature,weight\nprev=the,0.1\nnext=cat,0.4\n", encoding="utf-8")

    table = load_index_table(source, column="feature")

    assert table.get("next=cat") == 1
    assert table.size() == 2


def test_load_index_table_empty_file(tmp_path: Path) -> None:
    source = tmp_path / "empty.txt"
    source.write_text("", encoding="utf-8")

    table = load_index_table(source)

    assert table.size() == 0
    assert table.get("anything") == NOT_FOUND
