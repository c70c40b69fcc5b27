"""
Average waiting time against system load.

Either runs a load sweep (default scenario rates, arrival rates scaled by
each factor) or re-plots a CSV written by a previous sweep.

    python -m dualqueue.plot.plot_wait_vs_load --out-dir plots --csv sweep.csv
    python -m dualqueue.plot.plot_wait_vs_load --from-csv sweep.csv
"""
import argparse
import os

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd

from dualqueue.controller.sweep import run_load_sweep, print_sweep
from dualqueue.engineering.costants import (
    ARRIVAL_RATE_1, SERVICE_RATE_1, ARRIVAL_RATE_2, SERVICE_RATE_2, SWEEP_FACTORS, SWEEP_TARGET
)
from dualqueue.model.parameters import SimulationParameters


def ensure_dir(d: str):
    if d and not os.path.isdir(d):
        os.makedirs(d, exist_ok=True)


def plot_wait_vs_load(df: pd.DataFrame, outpath: str, dpi: int = 150, own: bool = False):
    cols = ("own_avg_wait_1", "own_avg_wait_2") if own else ("avg_wait_1", "avg_wait_2")
    df = df.sort_values("offered_load")
    x = pd.to_numeric(df["offered_load"], errors="coerce")

    plt.figure()
    for col, label in zip(cols, ("Stream 1", "Stream 2")):
        y = pd.to_numeric(df[col], errors="coerce")
        plt.plot(x, y, marker="o", label=label)
    plt.xlabel("Offered load")
    plt.ylabel("Average waiting time (ms)")
    plt.title("Waiting time vs system load")
    plt.grid(True, which="both", linestyle="--", alpha=0.4)
    plt.legend()
    plt.tight_layout()
    plt.savefig(outpath, dpi=dpi)
    plt.close()
    return outpath


def main(argv=None):
    ap = argparse.ArgumentParser(description="Average waiting time vs offered load")
    ap.add_argument("--from-csv", type=str, default=None,
                    help="Plot an existing sweep CSV instead of running a sweep")
    ap.add_argument("--csv", type=str, default=None, help="Write the sweep table to this CSV")
    ap.add_argument("--out-dir", type=str, default="plots", help="Output folder for the PNG")
    ap.add_argument("--dpi", type=int, default=150, help="Figure DPI")
    ap.add_argument("--factors", type=float, nargs="+", default=SWEEP_FACTORS,
                    help="Multipliers applied to both arrival rates")
    ap.add_argument("--target", type=int, default=SWEEP_TARGET,
                    help="Requests processed per run")
    ap.add_argument("--own-average", action="store_true",
                    help="Divide each stream's wait by its own processed count")
    args = ap.parse_args(argv)

    if args.from_csv:
        df = pd.read_csv(args.from_csv)
    else:
        base = SimulationParameters(ARRIVAL_RATE_1, SERVICE_RATE_1, ARRIVAL_RATE_2, SERVICE_RATE_2,
                                    target_processed=args.target)
        df = run_load_sweep(base, factors=args.factors, target=args.target)
        print_sweep(df)
        if args.csv:
            ensure_dir(os.path.dirname(args.csv))
            df.to_csv(args.csv, index=False)
            print(f"[plot] sweep table written to {args.csv}")

    ensure_dir(args.out_dir)
    out = plot_wait_vs_load(df, os.path.join(args.out_dir, "waiting_time_vs_load.png"),
                            dpi=args.dpi, own=args.own_average)
    print(f"[plot] {out}")
    return out


if __name__ == "__main__":
    main()
