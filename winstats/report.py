"""
Command-line report: loads one or two numeric columns from a CSV and
prints their statistics. With --window the vectors keep only the last N
rows; --rolling additionally replays the rows one at a time through the
window and prints the tail of the rolling statistics.
"""

import argparse
from typing import List, Optional

import pandas as pd
from tqdm import tqdm

from winstats.config import configure, get_settings
from winstats.errors import InvalidSize
from winstats.stats.dual import Correlation, Covariance, LeastSquareFit
from winstats.stats.single import Mean, Median, Mode, StdDev, Variance
from winstats.vector.sequence import Vector

ROLLING_TAIL = 10


def _check_columns(df: pd.DataFrame, required: list):
    """Checks if a dataframe contains all required columns."""
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"Missing columns: {missing}")


def load_columns(path: str, columns: List[str]) -> pd.DataFrame:
    """Reads the CSV and returns the requested columns as floats (bad cells become NaN)."""
    df = pd.read_csv(path)
    _check_columns(df, columns)
    return df[columns].apply(pd.to_numeric, errors="coerce")


def replay_window(df: pd.DataFrame, column: str, window: int, other: Optional[str] = None) -> pd.DataFrame:
    """
    Feeds the rows one at a time into FIFO windows and records the rolling
    mean and standard deviation (and correlation when `other` is given).

    The windows start out padded with missing entries, so the first rows
    are computed over the values seen so far.
    """
    xs = Vector(size=window, fill=False)
    ys = Vector(size=window, fill=False) if other else None
    mean, stddev = Mean(xs), StdDev(xs)
    corr = Correlation(xs, ys) if ys is not None else None

    records = []
    for i, row in tqdm(df.iterrows(), total=len(df), desc="Replaying rows"):
        xs.insert(row[column])
        record = {"row": i, "mean": mean.query(), "stddev": stddev.query()}
        if corr is not None:
            ys.insert(row[other])
            record["correlation"] = corr.query()
        records.append(record)

    if not records:
        return pd.DataFrame(columns=["mean", "stddev"])
    return pd.DataFrame(records).set_index("row").astype(float)


def format_report(xs: Vector, ys: Optional[Vector] = None, name1: str = "x", name2: str = "y") -> str:
    """Statistics report for one vector, plus the paired statistics when `ys` is given."""
    lines = ["=" * 50, " " * 16 + "Statistics Report", "=" * 50]
    for name, vec in ((name1, xs), (name2, ys)):
        if vec is None:
            continue
        lines.append(f"\n{name} ({vec.size()} values, {vec.missing_count()} missing):")
        for node in (Mean(vec), Median(vec), Mode(vec), Variance(vec), StdDev(vec)):
            lines.append("  " + node.as_string())

    if ys is not None:
        lines.append(f"\n{name1} vs {name2}:")
        for node in (Covariance(xs, ys), Correlation(xs, ys), LeastSquareFit(xs, ys)):
            lines.append("  " + node.as_string())

    lines.append("=" * 50)
    return "\n".join(lines)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Print descriptive statistics for CSV columns.")
    parser.add_argument("--csv", required=True, help="Path to the CSV file.")
    parser.add_argument("--column", required=True, help="Column to summarize.")
    parser.add_argument("--other", help="Second column for covariance, correlation and the fit.")
    parser.add_argument("--window", type=int,
                        help="Only use the last N rows (shorter files are padded with missing entries).")
    parser.add_argument("--rolling", action="store_true", help="Replay rows through the window (needs --window).")
    parser.add_argument("--unbias", action="store_true", help="Divide by N-1 instead of N.")
    parser.add_argument("--precision", type=int, help="Digits shown after the decimal point.")
    args = parser.parse_args(argv)

    if args.rolling and args.window is None:
        parser.error("--rolling needs --window")

    overrides = {}
    if args.unbias:
        overrides["unbias"] = True
    if args.precision is not None:
        overrides["ipres"] = args.precision
    if overrides:
        configure(**overrides)

    columns = [args.column] + ([args.other] if args.other else [])
    print("Step 1: Loading columns...")
    df = load_columns(args.csv, columns)

    try:
        xs = Vector(df[args.column], size=args.window, fill=False)
        ys = Vector(df[args.other], size=args.window, fill=False) if args.other else None
    except InvalidSize as e:
        parser.error(str(e))

    if args.rolling:
        print(f"Step 2: Replaying {len(df)} rows through a window of {args.window}...")
        rolling = replay_window(df, args.column, args.window, args.other)
        print(rolling.tail(ROLLING_TAIL).round(get_settings().ipres).to_string())

    print(format_report(xs, ys, args.column, args.other or "y"))
    return 0


if __name__ == "__main__":
    main()
