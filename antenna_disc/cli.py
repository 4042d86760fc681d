"""CLI to query antenna discrimination at one or more off-axis angles.

Usage:
    python -m antenna_disc.cli --csv patterns.csv --pattern ANT1 --angle 5 -5 190 --polarization both
    python -m antenna_disc.cli --db-url sqlite:///patterns.db --pattern ANT1 --angle 12.5
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from .config import EngineConfig, load_config_file
from .engine import DiscriminationEngine, DiscriminationResult
from .errors import DiscriminationError
from .patterns import Polarization
from .store import DEFAULT_TABLE_NAME, CsvPatternStore, SqlPatternStore


def _fmt(v: Optional[float]) -> str:
    return "-" if v is None else f"{v:.2f}"


def results_to_table(results: Iterable[DiscriminationResult]) -> List[List[str]]:
    """Convert results to a simple table (strings) for printing."""
    table = [["angle_deg", "canonical_deg", "co_v_db", "x_v_db", "co_h_db", "x_h_db"]]
    for r in results:
        table.append([
            f"{r.off_axis_angle_deg:g}",
            f"{r.canonical_angle_deg:g}",
            *(_fmt(v) for v in r.as_tuple()),
        ])
    return table


def print_table(table: List[List[str]]) -> None:
    widths = [max(len(row[i]) for row in table) for i in range(len(table[0]))]
    for row in table:
        print("  ".join(cell.ljust(widths[j]) for j, cell in enumerate(row)))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Query antenna discrimination (dB) at off-axis angles")
    src = parser.add_mutually_exclusive_group(required=True)
    src.add_argument("--csv", type=Path, help="CSV file with pattern samples")
    src.add_argument("--db-url", type=str, help="SQLAlchemy database URL holding pattern samples")
    parser.add_argument("--table", type=str, default=DEFAULT_TABLE_NAME, help="SQL table name")
    parser.add_argument("--pattern", type=str, required=True, help="pattern identifier")
    parser.add_argument("--angle", type=float, nargs="+", required=True, help="off-axis angle(s) in degrees")
    parser.add_argument("--polarization", type=str, default="both", choices=["V", "H", "both"])
    parser.add_argument("--config", type=Path, default=None, help="config file (.json or text)")
    parser.add_argument("--cache-capacity", type=int, default=None, help="override cache capacity")
    parser.add_argument("--log-level", type=str, default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    config = load_config_file(args.config) if args.config is not None else EngineConfig()
    if args.cache_capacity is not None:
        config = EngineConfig(cache_capacity=args.cache_capacity,
                              symmetry_threshold_deg=config.symmetry_threshold_deg)

    if args.csv is not None:
        store = CsvPatternStore(args.csv)
    else:
        store = SqlPatternStore(args.db_url, table_name=args.table)
    engine = DiscriminationEngine(store, config)
    pol = Polarization.parse(args.polarization)

    try:
        results = [engine.query(args.pattern, a, pol) for a in args.angle]
    except DiscriminationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print_table(results_to_table(results))
    return 0


if __name__ == "__main__":
    sys.exit(main())
