import threading
import time

from dualqueue.engineering.distributions import RandomProcess
from dualqueue.model.generator import Generator
from dualqueue.model.request import Request
from dualqueue.model.stream_queue import StreamQueue


def test_generator_fills_queue_in_enqueue_order():
    q = StreamQueue(1, capacity=100)
    stop = threading.Event()
    g = Generator(1, RandomProcess(500, 10), q, stop, arrival_scale_ms=1, poll=0.005)
    g.start()
    time.sleep(0.05)
    stop.set()
    g.join(1.0)

    assert not g.is_alive()
    assert g.generated == q.enqueued > 0
    stamps = [q.get_nowait().enqueued_at for _ in range(len(q))]
    assert stamps == sorted(stamps)


def test_blocked_generator_honours_its_poll_interval():
    q = StreamQueue(2, capacity=1)
    q.put(Request(stream_id=2, arrival_gap=0.0, service_time=0.0, enqueued_at=0.0))
    stop = threading.Event()
    g = Generator(2, RandomProcess(1000, 10), q, stop, arrival_scale_ms=1, poll=0.002)
    g.start()

    deadline = time.monotonic() + 1.0
    while q.blocked_puts == 0 and time.monotonic() < deadline:
        time.sleep(0.001)
    assert q.blocked_puts == 1

    began = time.monotonic()
    stop.set()
    g.join(1.0)
    assert not g.is_alive()
    assert time.monotonic() - began < 0.04
    assert g.generated == 0
    assert len(q) == 1
