import sys

from dualqueue.controller.simulation import run_simulation
from dualqueue.controller.sweep import run_load_sweep, print_sweep
from dualqueue.engineering.costants import (
    ARRIVAL_RATE_1, SERVICE_RATE_1, ARRIVAL_RATE_2, SERVICE_RATE_2, TARGET_PROCESSED, SWEEP_TARGET
)
from dualqueue.engineering.statistics import offered_load
from dualqueue.model.parameters import RunStatus, SimulationParameters

FORM = [
    ("arrival_rate_1", "Arrival rate of generator 1", ARRIVAL_RATE_1),
    ("service_rate_1", "Service rate of generator 1", SERVICE_RATE_1),
    ("arrival_rate_2", "Arrival rate of generator 2", ARRIVAL_RATE_2),
    ("service_rate_2", "Service rate of generator 2", SERVICE_RATE_2),
    ("target_processed", "Processed requests to end the simulation", TARGET_PROCESSED),
]


def print_banner():
    print("=" * 60)
    print("  Single server, two request streams")
    print("=" * 60)


def choose_mode():
    print("\nChoose a mode:")
    print("1. Single run")
    print("2. Load sweep (waiting time vs load)")
    print("3. Exit")
    choice = input("Enter: ").strip()
    if choice == "1":
        return "single"
    elif choice == "2":
        return "sweep"
    elif choice == "3":
        sys.exit()
    else:
        print("Invalid choice. Default: single.")
        return "single"


def read_form():
    raw = {}
    for name, label, default in FORM:
        hint = f" [{default:g}]" if default is not None else ""
        text = input(f"{label}{hint}: ").strip()
        raw[name] = text if text or default is None else str(default)
    return raw


def fmt(x, unit=""):
    return "N/A" if x is None else f"{x:.2f}{unit}"


def report(status, metrics):
    print(f"\n{status}")
    if metrics is None:
        return
    print(f"Offered load           : {fmt(metrics.offered_load)}")
    print(f"Actual utilization     : {fmt(metrics.actual_utilization)}")
    w1, w2 = metrics.average_wait
    print(f"Average waiting time   : stream 1 {fmt(w1, ' ms')}, stream 2 {fmt(w2, ' ms')}")
    o1, o2 = metrics.own_average_wait
    print(f"  per own stream count : stream 1 {fmt(o1, ' ms')}, stream 2 {fmt(o2, ' ms')}")


def single_run():
    print(RunStatus.not_started())
    raw = read_form()
    status, metrics = run_simulation(raw, verbose=True)
    report(status, metrics)


def sweep_run():
    base = SimulationParameters(ARRIVAL_RATE_1, SERVICE_RATE_1, ARRIVAL_RATE_2, SERVICE_RATE_2,
                                target_processed=SWEEP_TARGET)
    print(f"Base offered load: {offered_load(base):.3f}")
    df = run_load_sweep(base)
    print_sweep(df)


def run_sim():
    print_banner()
    while True:
        mode = choose_mode()
        if mode == "sweep":
            sweep_run()
        else:
            single_run()


if __name__ == "__main__":
    run_sim()
