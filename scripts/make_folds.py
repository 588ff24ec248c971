#!/usr/bin/env python
"""
Create V-fold cross-validation assignments for a CSV file.

Reads the settings from a YAML config (configs/vfold.yaml by default),
lets command-line flags override them, prints the resample summary and
optionally writes the fold table (one row per held-out record) to CSV with
a JSON sidecar holding the metadata.

Usage:
    python scripts/make_folds.py data.csv
    python scripts/make_folds.py data.csv --v 5 --repeats 3 --strata churn
    python scripts/make_folds.py data.csv --config configs/vfold.yaml --output folds.csv
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from vfoldcv.config import VFoldConfig
from vfoldcv.data import DataFrameDataset
from vfoldcv.errors import ConfigurationError
from vfoldcv.resampling import vfold_cv_from_config


def build_config(args: argparse.Namespace) -> VFoldConfig:
    """Load the YAML config and apply command-line overrides."""
    cfg = VFoldConfig.from_yaml(args.config)
    overrides = {
        "v": args.v,
        "repeats": args.repeats,
        "strata": args.strata,
        "breaks": args.breaks,
        "random_seed": args.seed,
    }
    return cfg.model_copy(update={k: val for k, val in overrides.items() if val is not None})


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Create V-fold cross-validation assignments for a CSV file"
    )
    parser.add_argument("csv", type=str, help="Path to the input CSV file")
    parser.add_argument("--config", type=str, help="Path to config YAML file")
    parser.add_argument("--v", type=int, help="Number of folds (overrides config)")
    parser.add_argument("--repeats", type=int, help="Number of repeats (overrides config)")
    parser.add_argument("--strata", type=str, help="Column to stratify by (overrides config)")
    parser.add_argument("--breaks", type=int, help="Quantile bins for numeric strata")
    parser.add_argument("--seed", type=int, help="Random seed (overrides config)")
    parser.add_argument("--output", type=str, help="Write the fold table to this CSV")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = build_config(args)
    dataset = DataFrameDataset.from_csv(args.csv)

    try:
        rset = vfold_cv_from_config(dataset, cfg)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    print("=" * 70)
    print(rset.pretty())
    print("=" * 70)
    print(f"  Input: {args.csv} ({len(dataset)} rows)")
    print(f"  Strata: {cfg.strata}")
    print(f"  Seed: {cfg.random_seed}")
    print("=" * 70)
    print(rset.to_frame().to_string())

    if args.output:
        out_path = Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        rset.fold_table().to_csv(out_path, index=False)

        meta = {
            "source": str(args.csv),
            "n_rows": dataset.n_rows,
            "scheme": rset.scheme,
            "summary": rset.pretty(),
            "id_columns": rset.id_columns,
            **dict(rset.attrib),
            "config": cfg.model_dump(),
        }
        meta_path = out_path.with_suffix(".json")
        with open(meta_path, "w") as f:
            json.dump(meta, f, indent=2)

        print(f"\nFold table saved to: {out_path}")
        print(f"  - Metadata: {meta_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
