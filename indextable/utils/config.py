"""Configuration loading and manipulation helpers."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, MutableMapping, Sequence

import yaml

from ..data.indexers import DEFAULT_LOAD_FACTOR


@dataclass(frozen=True)
class IndexConfig:
    """Validated settings of the `index` configuration section."""

    load_factor: float = DEFAULT_LOAD_FACTOR
    deduplicate: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.load_factor, (int, float)) or isinstance(self.load_factor, bool):
            raise ValueError(f"index.load_factor must be a number, got {self.load_factor!r}.")
        if not 0.0 < float(self.load_factor) <= 1.0:
            raise ValueError(f"index.load_factor must be in (0, 1], got {self.load_factor}.")
        if not isinstance(self.deduplicate, bool):
            raise ValueError(f"index.deduplicate must be a boolean, got {self.deduplicate!r}.")

    @classmethod
    def from_mapping(cls, section: Mapping[str, Any] | None) -> "IndexConfig":
        section = section or {}
        return cls(
            load_factor=section.get("load_factor", DEFAULT_LOAD_FACTOR),
            deduplicate=section.get("deduplicate", False),
        )


def load_config(config_path: Path) -> Mapping[str, Any]:
    """
    Parse a YAML configuration file into a nested mapping.

    An empty file yields an empty mapping; any other non-mapping document
    (a bare list or scalar) is rejected.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as handle:
        config = yaml.safe_load(handle)
    if config is None:
        return {}
    if not isinstance(config, Mapping):
        raise ValueError(
            f"Configuration in {config_path} must be a mapping, got {type(config).__name__}."
        )
    return config


def clone_config(config: Mapping[str, Any]) -> dict[str, Any]:
    """Return a deep copy of the configuration mapping."""
    return copy.deepcopy(dict(config))


def set_by_dotted_path(
    config: MutableMapping[str, Any],
    dotted_key: str,
    value: Any,
) -> None:
    """
    Assign a value inside a nested mapping using dotted-path syntax.

    Examples
    --------
    >>> cfg = {"index": {"load_factor": 0.7}}
    >>> set_by_dotted_path(cfg, "index.load_factor", 0.5)
    >>> cfg["index"]["load_factor"]
    0.5
    """
    keys: Sequence[str] = dotted_key.split(".")
    current: MutableMapping[str, Any] = config
    for key in keys[:-1]:
        if key not in current or not isinstance(current[key], MutableMapping):
            current[key] = {}
        current = current[key]  # type: ignore[assignment]
    current[keys[-1]] = value


def get_by_dotted_path(config: Mapping[str, Any], dotted_key: str, default: Any = None) -> Any:
    """Fetch a value from a nested mapping using dotted-path syntax."""
    current: Any = config
    for key in dotted_key.split("."):
        if not isinstance(current, Mapping) or key not in current:
            return default
        current = current[key]
    return current


def apply_overrides(config: Mapping[str, Any], overrides: Iterable[str]) -> dict[str, Any]:
    """
    Return a copy of ``config`` with ``key=value`` overrides applied.

    Values are parsed as YAML scalars, so ``index.load_factor=0.5`` yields a
    float and ``index.deduplicate=true`` a boolean.
    """
    updated = clone_config(config)
    for override in overrides:
        key, sep, raw_value = override.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Override must look like 'key=value', got {override!r}.")
        set_by_dotted_path(updated, key.strip(), yaml.safe_load(raw_value))
    return updated
