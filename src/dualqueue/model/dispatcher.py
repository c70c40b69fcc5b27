import threading
import time
from enum import Enum

import numpy as np

from dualqueue.engineering.costants import POLL_INTERVAL


class DispatcherState(Enum):
    IDLE = "Idle"
    AWAITING_REQUEST = "AwaitingRequest"
    HANDING_OFF = "HandingOff"
    STOPPED = "Stopped"


class Dispatcher:
    def __init__(self, queues, server, run_state, rng=None, poll=POLL_INTERVAL):
        self.queues = list(queues)
        self.ready = self.queues[0].ready
        if any(q.ready is not self.ready for q in self.queues):
            raise ValueError("stream queues must share the same ready condition")
        self.server = server
        self.run_state = run_state
        self.rng = rng if rng is not None else np.random.default_rng()
        self.poll = poll

        self.state = DispatcherState.IDLE
        self.dispatched = [0] * len(self.queues)
        self.workers = []
        self.thread = None

    def start(self):
        self.thread = threading.Thread(target=self.run, name="dispatcher", daemon=True)
        self.thread.start()

    def wake(self):
        with self.ready:
            self.ready.notify_all()

    def next_request(self):
        with self.ready:
            while not self.run_state.stopped:
                candidates = [q for q in self.queues if not q.empty()]
                if candidates:
                    # no priority between streams
                    if len(candidates) == 1:
                        return candidates[0].get_nowait()
                    return candidates[int(self.rng.integers(len(candidates)))].get_nowait()
                self.ready.wait(self.poll)
        return None

    def run(self):
        stop = self.run_state.stop_requested
        self.state = DispatcherState.AWAITING_REQUEST
        while True:
            request = self.next_request()
            if request is None:
                break

            self.state = DispatcherState.HANDING_OFF
            if not self.server.acquire(stop_event=stop, poll=self.poll):
                break
            # the completion that hit the target raises stop before freeing
            # the server, so this check cannot miss it
            if stop.is_set():
                self.server.release()
                break

            admitted_at = time.monotonic()
            worker = threading.Thread(
                target=self.server.process,
                args=(request, self.run_state, admitted_at),
                name=f"service-{request.stream_id}",
                daemon=True,
            )
            worker.start()
            self.workers = [w for w in self.workers if w.is_alive()]
            self.workers.append(worker)
            self.dispatched[request.stream_id - 1] += 1
            self.state = DispatcherState.AWAITING_REQUEST

        self.state = DispatcherState.STOPPED

    def join(self, timeout=None):
        if self.thread is not None:
            self.thread.join(timeout)
        for worker in list(self.workers):
            worker.join(timeout)

    def is_alive(self):
        return self.thread is not None and self.thread.is_alive()
