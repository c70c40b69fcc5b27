import threading
import time

from dualqueue.engineering.costants import SERVICE_SCALE_MS, POLL_INTERVAL


class Server:
    def __init__(self, name="Server", service_scale_ms=SERVICE_SCALE_MS):
        self.name = name
        self.service_scale_ms = service_scale_ms

        self._admission = threading.Semaphore(1)
        self.lock = threading.Lock()

        self.busy = False
        self.busy_ms = 0.0
        self.total_completions = 0

        self.in_service = 0
        self.max_concurrency = 0

    def try_acquire(self):
        return self._admission.acquire(blocking=False)

    def acquire(self, stop_event=None, poll=POLL_INTERVAL):
        while True:
            if stop_event is not None and stop_event.is_set():
                return False
            if self._admission.acquire(timeout=poll):
                return True

    def release(self):
        self._admission.release()

    def is_busy(self):
        with self.lock:
            return self.busy

    # caller must already hold the admission slot
    def process(self, request, run_state, admitted_at=None):
        try:
            with self.lock:
                self.busy = True
                self.in_service += 1
                self.max_concurrency = max(self.max_concurrency, self.in_service)

            # wait is measured at admission, not after the service delay
            run_state.record_wait(request, now=admitted_at)

            duration_ms = request.service_ms(self.service_scale_ms)
            time.sleep(duration_ms / 1000.0)

            with self.lock:
                self.busy = False
                self.in_service -= 1
                self.busy_ms += duration_ms
                self.total_completions += 1

            # stop is raised here when the target is hit, before the slot is
            # handed back
            run_state.record_completion(request)
        finally:
            self.release()
