import threading
import time


class RunState:
    def __init__(self, target_processed):
        self.target = int(target_processed)

        self.lock = threading.Lock()
        self.changed = threading.Condition(self.lock)
        self.stop_requested = threading.Event()

        self.processed = 0
        self.processed_per_stream = [0, 0]
        self.wait_sum_ms = [0.0, 0.0]
        # (enqueued_at, wait_ms) in admission order, per stream
        self.wait_samples = ([], [])

        self.started_at = None
        self.finished_at = None

    def start(self):
        with self.lock:
            self.started_at = time.monotonic()

    def record_wait(self, request, now=None):
        now = time.monotonic() if now is None else now
        wait_ms = (now - request.enqueued_at) * 1000.0
        idx = request.stream_id - 1
        with self.lock:
            self.wait_sum_ms[idx] += wait_ms
            self.wait_samples[idx].append((request.enqueued_at, wait_ms))
        return wait_ms

    # stop is raised inside the lock when the target is hit
    def record_completion(self, request):
        with self.changed:
            self.processed += 1
            self.processed_per_stream[request.stream_id - 1] += 1
            reached = self.processed >= self.target
            if reached and self.finished_at is None:
                self.finished_at = time.monotonic()
                self.stop_requested.set()
            self.changed.notify_all()
        return reached

    def request_stop(self):
        with self.changed:
            self.stop_requested.set()
            self.changed.notify_all()

    def mark_finished(self):
        with self.lock:
            if self.finished_at is None and self.started_at is not None:
                self.finished_at = time.monotonic()

    @property
    def stopped(self):
        return self.stop_requested.is_set()

    def wait_for_target(self, timeout=None):
        with self.changed:
            return self.changed.wait_for(
                lambda: self.processed >= self.target or self.stop_requested.is_set(),
                timeout=timeout,
            )

    def elapsed_ms(self):
        with self.lock:
            if self.started_at is None:
                return 0.0
            end = self.finished_at if self.finished_at is not None else time.monotonic()
            return (end - self.started_at) * 1000.0

    def snapshot(self):
        with self.lock:
            return {
                "processed": self.processed,
                "processed_per_stream": list(self.processed_per_stream),
                "wait_sum_ms": list(self.wait_sum_ms),
                "waits_ms": [[w for _, w in s] for s in self.wait_samples],
            }
