import threading
import time

from dualqueue.engineering.costants import ARRIVAL_SCALE_MS, POLL_INTERVAL
from dualqueue.model.request import Request


class Generator:
    def __init__(self, stream_id, random_process, stream_queue, stop_event,
                 arrival_scale_ms=ARRIVAL_SCALE_MS, poll=POLL_INTERVAL):
        self.stream_id = stream_id
        self.random_process = random_process
        self.queue = stream_queue
        self.stop_event = stop_event
        self.arrival_scale_ms = arrival_scale_ms
        self.poll = poll

        self.generated = 0
        self.thread = None

    def start(self):
        self.thread = threading.Thread(
            target=self.run, name=f"generator-{self.stream_id}", daemon=True
        )
        self.thread.start()

    def run(self):
        while not self.stop_event.is_set():
            gap, service = self.random_process.draw()

            # inter-arrival pause; a stop cuts it short
            if self.stop_event.wait(gap * self.arrival_scale_ms / 1000.0):
                break

            request = Request(
                stream_id=self.stream_id,
                arrival_gap=gap,
                service_time=service,
                enqueued_at=time.monotonic(),
            )
            if not self.queue.put(request, stop_event=self.stop_event, poll=self.poll):
                break
            self.generated += 1

    def join(self, timeout=None):
        if self.thread is not None:
            self.thread.join(timeout)

    def is_alive(self):
        return self.thread is not None and self.thread.is_alive()
