import threading

import numpy as np

from dualqueue.engineering.costants import (
    QUEUE_CAPACITY, ARRIVAL_SCALE_MS, SERVICE_SCALE_MS, POLL_INTERVAL, STREAM_IDS
)
from dualqueue.engineering.distributions import RandomProcess
from dualqueue.engineering.statistics import StatsAggregator, offered_load
from dualqueue.model.dispatcher import Dispatcher
from dualqueue.model.generator import Generator
from dualqueue.model.parameters import (
    SimulationParameters, SimulationMetrics, RunStatus, ValidationError, parse_parameters
)
from dualqueue.model.run_state import RunState
from dualqueue.model.server import Server
from dualqueue.model.stream_queue import StreamQueue


class SimulationEngine:
    """
    One simulation run: two generators, two stream queues, the dispatcher
    and the server, sharing a single RunState.

    An engine runs once. Build a new one for the next run.
    """

    def __init__(self, params, queue_capacity=QUEUE_CAPACITY,
                 arrival_scale_ms=ARRIVAL_SCALE_MS, service_scale_ms=SERVICE_SCALE_MS,
                 poll=POLL_INTERVAL, verbose=False):
        if not isinstance(params, SimulationParameters):
            raise TypeError("params must be SimulationParameters")
        if params.target_processed < 0:
            raise ValidationError("the number of requests to process must not be negative.")
        # rejects non-positive rates before any thread exists
        self.random_processes = [RandomProcess(*params.rates(i)) for i in STREAM_IDS]

        self.params = params
        self.verbose = verbose
        self.poll = poll

        self.run_state = RunState(params.target_processed)
        self.server = Server("Server", service_scale_ms=service_scale_ms)
        ready = threading.Condition()
        self.queues = [StreamQueue(i, capacity=queue_capacity, ready=ready) for i in STREAM_IDS]
        self.generators = [
            Generator(i, rp, q, self.run_state.stop_requested,
                      arrival_scale_ms=arrival_scale_ms, poll=poll)
            for i, rp, q in zip(STREAM_IDS, self.random_processes, self.queues)
        ]
        self.dispatcher = Dispatcher(self.queues, self.server, self.run_state,
                                     rng=np.random.default_rng(), poll=poll)
        self.stats = StatsAggregator(params, self.run_state, self.server)

        self._started = False
        self._stopped = False
        self._status = RunStatus.not_started()

    @property
    def status(self):
        return self._status

    def start(self):
        if self._started:
            raise RuntimeError("simulation already started; create a new engine for another run")
        self._started = True
        self.run_state.start()
        self._status = RunStatus.running()

        if self.params.target_processed == 0:
            # nothing to serve
            self.run_state.request_stop()
            self.run_state.mark_finished()
            self._stopped = True
            self._status = RunStatus.completed(0)
            return

        if self.verbose:
            print(f"[engine] started, offered load {offered_load(self.params):.2f}, "
                  f"target {self.params.target_processed}")

        self.dispatcher.start()
        for g in self.generators:
            g.start()

    def wait(self, timeout=None):
        """Wait for the target (or a stop); True if the run is over."""
        if not self._started:
            raise RuntimeError("simulation not started")
        done = self.run_state.wait_for_target(timeout)
        if done:
            self.stop()
        return done

    def stop(self, timeout=None):
        """Raise the stop signal, let every thread leave, close the run."""
        if not self._started:
            raise RuntimeError("simulation not started")
        if self._stopped:
            return
        self.run_state.request_stop()
        self.dispatcher.wake()
        for g in self.generators:
            g.join(timeout)
        # joins the service in flight too, so it is counted exactly once
        self.dispatcher.join(timeout)
        self.run_state.mark_finished()
        self._stopped = True

        processed = self.run_state.snapshot()["processed"]
        self._status = RunStatus.completed(processed)
        if self.verbose:
            print(f"[engine] stopped after {processed} requests "
                  f"({self.run_state.elapsed_ms():.0f} ms)")

    def snapshot(self):
        """Metrics as of now; fields that are not defined yet are None."""
        if not self._started:
            return SimulationMetrics(offered_load=offered_load(self.params))
        return self.stats.metrics()

    def run(self, timeout=None):
        """start() + wait() + final metrics."""
        self.start()
        if not self.wait(timeout):
            self.stop()
        return self.snapshot()


def run_simulation(raw, verbose=False, **engine_kwargs):
    """
    Presentation-side entry point: raw form values (or ready parameters)
    in, (RunStatus, SimulationMetrics or None) out. Invalid input never
    creates an engine.
    """
    try:
        params = raw if isinstance(raw, SimulationParameters) else parse_parameters(raw)
        engine = SimulationEngine(params, verbose=verbose, **engine_kwargs)
    except ValidationError as e:
        return RunStatus.validation_error(str(e)), None
    metrics = engine.run()
    return engine.status, metrics
