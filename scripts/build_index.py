"""Command-line interface for building an index table and resolving lookups."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

from loguru import logger

from indextable.data import NOT_FOUND
from indextable.pipelines import lookup_keys, run_indexing
from indextable.utils import apply_overrides, load_config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("configs/default.yaml"),
        help="Path to the YAML configuration file.",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override a config value using dotted paths, e.g. index.load_factor=0.5.",
    )
    parser.add_argument(
        "--lookup",
        nargs="*",
        default=[],
        metavar="KEY",
        help="Values to resolve against the built table.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    config = apply_overrides(load_config(args.config), args.overrides)
    logger.info("Building index table with config at {}", args.config)
    result = run_indexing(config)

    for key, index in lookup_keys(result.table, args.lookup).items():
        if index == NOT_FOUND:
            logger.info("{!r} -> not found", key)
        else:
            logger.info("{!r} -> {}", key, index)


if __name__ == "__main__":
    main()
