#!/usr/bin/env python3
"""Generate a synthetic portfolio dataset (or the input template) as JSON.

The output document has the shape accepted by ``run_analysis.py``.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pricing_warehouse.config import WarehouseConfig
from pricing_warehouse.exceptions import WarehouseError
from pricing_warehouse.loader import sample_template
from pricing_warehouse.logging import setup_logging
from pricing_warehouse.scenarios import PortfolioScenario
from pricing_warehouse.sinks import ConsoleSink, JsonFileSink

logger = logging.getLogger(__name__)


def main() -> int:
    """Generate the dataset and write it to the output directory."""
    try:
        config = WarehouseConfig.from_env()
    except WarehouseError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    parser = argparse.ArgumentParser(description="Synthetic insurance portfolio generator")
    parser.add_argument(
        "--policyholders",
        type=int,
        default=config.generator.num_policyholders,
        help="Number of policyholders (default: 3500)",
    )
    parser.add_argument(
        "--policies",
        type=int,
        default=config.generator.num_policies,
        help="Number of policies (default: 5000)",
    )
    parser.add_argument("--seed", type=int, default=config.seed, help="Random seed")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=config.output.json_output_dir,
        help="Output directory (default: output)",
    )
    parser.add_argument("--pretty", action="store_true", default=config.output.pretty_json)
    parser.add_argument(
        "--template", action="store_true", help="Write the one-record input template instead"
    )
    parser.add_argument(
        "--console", action="store_true", help="Print a preview instead of writing a file"
    )
    parser.add_argument(
        "--max-records", type=int, default=5, help="Records per entity in the preview (default: 5)"
    )
    parser.add_argument("--log-level", default=config.log_level)
    args = parser.parse_args()

    setup_logging(args.log_level)

    if args.console:
        sink = ConsoleSink(pretty=args.pretty, max_records=args.max_records)
    else:
        sink = JsonFileSink(args.output_dir, pretty=args.pretty)
    try:
        if args.template:
            args.output_dir.mkdir(parents=True, exist_ok=True)
            path = args.output_dir / "insurance_data_template.json"
            path.write_text(json.dumps(sample_template(), indent=2), encoding="utf-8")
            logger.info("Template written to %s", path)
            return 0

        config.generator.num_policyholders = args.policyholders
        config.generator.num_policies = args.policies
        scenario = PortfolioScenario(config.generator, seed=args.seed)
        scenario.generate()
        scenario.export([sink])

        for product, stats in scenario.get_calibration_summary().items():
            logger.info(
                "%-18s policies=%5d claims=%4d LR=%s (target %.2f)",
                product,
                stats["policies"],
                stats["claims"],
                "n/a" if stats["realized_loss_ratio"] is None else f"{stats['realized_loss_ratio']:.2f}",
                stats["target_loss_ratio"],
            )
    except WarehouseError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    sink.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
