#!/usr/bin/env python3
"""Run the portfolio analysis over a dataset JSON file.

Writes ``analysis.json`` to the output directory, or prints the result
when ``--console`` is given. On invalid input nothing is written and the
script exits with status 1.
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pricing_warehouse.analysis import compute_analysis
from pricing_warehouse.config import WarehouseConfig
from pricing_warehouse.exceptions import WarehouseError
from pricing_warehouse.loader import load_dataset
from pricing_warehouse.logging import setup_logging
from pricing_warehouse.sinks import ConsoleSink, JsonFileSink

logger = logging.getLogger(__name__)


def main() -> int:
    """Load, analyze and export."""
    try:
        config = WarehouseConfig.from_env()
    except WarehouseError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    parser = argparse.ArgumentParser(description="Insurance portfolio analysis")
    parser.add_argument("dataset", type=Path, help="Dataset JSON file")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=config.output.json_output_dir,
        help="Output directory (default: output)",
    )
    parser.add_argument("--pretty", action="store_true", default=config.output.pretty_json)
    parser.add_argument("--console", action="store_true", help="Print instead of writing a file")
    parser.add_argument(
        "--as-of",
        type=date.fromisoformat,
        default=None,
        help="Reference date for duration bands (default: today)",
    )
    parser.add_argument("--parallel", action="store_true", help="Aggregate on worker threads")
    parser.add_argument("--log-level", default=config.log_level)
    args = parser.parse_args()

    setup_logging(args.log_level)

    try:
        store = load_dataset(args.dataset)
        result = compute_analysis(store, as_of=args.as_of, parallel=args.parallel)
    except (WarehouseError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    sink = ConsoleSink(pretty=True) if args.console else JsonFileSink(args.output_dir, args.pretty)
    try:
        sink.write_document("analysis", result)
    except WarehouseError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    sink.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
