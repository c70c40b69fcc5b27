import queue
import threading

from dualqueue.engineering.costants import QUEUE_CAPACITY, POLL_INTERVAL


class StreamQueue:
    def __init__(self, stream_id, capacity=QUEUE_CAPACITY, ready=None):
        if capacity <= 0:
            raise ValueError(f"queue capacity must be positive, got {capacity}")
        self.stream_id = stream_id
        self.capacity = capacity
        # shared by every queue of a run, signalled after each put
        self.ready = ready if ready is not None else threading.Condition()
        self._items = queue.Queue(maxsize=capacity)

        self._stats_lock = threading.Lock()
        self.enqueued = 0
        self.dequeued = 0
        self.high_water = 0
        self.blocked_puts = 0

    def __len__(self):
        return self._items.qsize()

    def empty(self):
        return self._items.empty()

    # full queue: wait for room; False if stopped first (request not enqueued)
    def put(self, request, stop_event=None, poll=POLL_INTERVAL):
        try:
            self._items.put_nowait(request)
        except queue.Full:
            with self._stats_lock:
                self.blocked_puts += 1
            while True:
                if stop_event is not None and stop_event.is_set():
                    return False
                try:
                    self._items.put(request, timeout=poll)
                    break
                except queue.Full:
                    continue

        with self._stats_lock:
            self.enqueued += 1
            self.high_water = max(self.high_water, self.enqueued - self.dequeued)
        with self.ready:
            self.ready.notify_all()
        return True

    def get_nowait(self):
        with self._stats_lock:
            request = self._items.get_nowait()
            self.dequeued += 1
        return request
