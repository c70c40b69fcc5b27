import pandas as pd
from tqdm import trange

from dualqueue.engineering.costants import SWEEP_FACTORS, SWEEP_TARGET
from dualqueue.controller.simulation import SimulationEngine

SWEEP_COLUMNS = [
    "factor", "offered_load", "utilization",
    "avg_wait_1", "avg_wait_2", "own_avg_wait_1", "own_avg_wait_2",
    "processed", "elapsed_ms",
]


def run_load_sweep(params, factors=None, target=None, progress=True, **engine_kwargs):
    """
    One run per factor, arrival rates of both streams scaled by the factor,
    service rates untouched. Runs are sequential, each on its own engine.
    """
    if factors is None: factors = SWEEP_FACTORS
    if target is None:  target = SWEEP_TARGET
    factors = list(factors)

    iterator = trange(len(factors), desc="Load sweep") if progress else range(len(factors))

    rows = []
    for k in iterator:
        factor = factors[k]
        run_params = params.scaled(factor, target_processed=target)
        metrics = SimulationEngine(run_params, **engine_kwargs).run()
        row = metrics.as_row()
        row["factor"] = factor
        rows.append(row)

    df = pd.DataFrame(rows, columns=SWEEP_COLUMNS)
    return df.sort_values("offered_load").reset_index(drop=True)


def print_sweep(df):
    print(f"\n{'='*70}")
    print(f"LOAD SWEEP - {len(df)} runs")
    print(f"{'='*70}")
    print(f"{'factor':>7} {'rho':>7} {'util':>7} {'W1 (ms)':>10} {'W2 (ms)':>10}")
    for _, r in df.iterrows():
        print(f"{r['factor']:>7.2f} {r['offered_load']:>7.3f} {_fmt(r['utilization'], 7, 3)} "
              f"{_fmt(r['avg_wait_1'], 10, 2)} {_fmt(r['avg_wait_2'], 10, 2)}")


def _fmt(x, width, digits):
    if x is None or pd.isna(x):
        return f"{'N/A':>{width}}"
    return f"{x:>{width}.{digits}f}"
