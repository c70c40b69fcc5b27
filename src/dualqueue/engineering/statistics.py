import numpy as np
from scipy.stats import t

from dualqueue.engineering.costants import CONFIDENCE_LEVEL
from dualqueue.model.parameters import SimulationMetrics


def offered_load(params):
    """ρ = λ1/μ1 + λ2/μ2, known before any run."""
    return params.arrival_rate_1 / params.service_rate_1 + params.arrival_rate_2 / params.service_rate_2


def utilization(busy_ms, elapsed_ms):
    if elapsed_ms <= 0:
        return None
    return busy_ms / elapsed_ms


def average(total, count):
    if count <= 0:
        return None
    return total / count


def confidence_half_width(samples, confidence=None):
    """Student-t half width of the mean of `samples`; None below 2 samples."""
    if confidence is None: confidence = CONFIDENCE_LEVEL
    x = np.asarray(list(samples), dtype=float)
    n = x.size
    if n < 2:
        return None
    s = float(np.std(x, ddof=1))
    alpha = 1.0 - float(confidence); u = 1.0 - alpha / 2.0
    t_star = float(t.ppf(u, n - 1))
    return t_star * (s / np.sqrt(n))


class StatsAggregator:
    """
    Turns the counters of a run (RunState + Server) into SimulationMetrics.

    average_wait[i] divides stream i's wait sum by the processed count of
    BOTH streams, as the lab version of the model always reported it.
    own_average_wait[i] divides by stream i's own count instead.
    """

    def __init__(self, params, run_state, server, confidence=None):
        self.params = params
        self.run_state = run_state
        self.server = server
        self.confidence = CONFIDENCE_LEVEL if confidence is None else confidence

    def offered_load(self):
        return offered_load(self.params)

    def metrics(self):
        counters = self.run_state.snapshot()
        with self.server.lock:
            busy_ms = self.server.busy_ms
        elapsed_ms = self.run_state.elapsed_ms()

        processed = counters["processed"]
        per_stream = counters["processed_per_stream"]
        wait_sum = counters["wait_sum_ms"]

        return SimulationMetrics(
            offered_load=self.offered_load(),
            actual_utilization=utilization(busy_ms, elapsed_ms),
            average_wait=[average(w, processed) for w in wait_sum],
            processed_count=processed,
            processed_per_stream=per_stream,
            elapsed_ms=elapsed_ms,
            busy_ms=busy_ms,
            own_average_wait=[average(w, n) for w, n in zip(wait_sum, per_stream)],
            wait_half_width=[confidence_half_width(s, self.confidence) for s in counters["waits_ms"]],
        )
