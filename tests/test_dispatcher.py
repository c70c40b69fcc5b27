import threading
import time

from dualqueue.model.dispatcher import Dispatcher, DispatcherState
from dualqueue.model.request import Request
from dualqueue.model.run_state import RunState
from dualqueue.model.server import Server
from dualqueue.model.stream_queue import StreamQueue


def build(target, service_scale_ms=1):
    ready = threading.Condition()
    queues = [StreamQueue(1, ready=ready), StreamQueue(2, ready=ready)]
    server = Server(service_scale_ms=service_scale_ms)
    run_state = RunState(target)
    run_state.start()
    dispatcher = Dispatcher(queues, server, run_state, poll=0.01)
    return queues, server, run_state, dispatcher


def req(stream_id, i):
    return Request(stream_id=stream_id, arrival_gap=0.0, service_time=1.0, enqueued_at=time.monotonic() + i * 1e-6)


def test_serves_both_queues_and_stops_at_target():
    queues, server, run_state, dispatcher = build(target=6)
    for i in range(4):
        queues[0].put(req(1, i))
        queues[1].put(req(2, i))

    dispatcher.start()
    assert run_state.wait_for_target(timeout=5.0)
    dispatcher.join(2.0)

    assert not dispatcher.is_alive()
    assert dispatcher.state is DispatcherState.STOPPED
    assert run_state.processed == 6
    assert sum(dispatcher.dispatched) == 6
    assert server.max_concurrency == 1
    # the rest is abandoned; one may already have been pulled when stop came
    assert len(queues[0]) + len(queues[1]) in (1, 2)


def test_fifo_within_a_stream():
    queues, server, run_state, dispatcher = build(target=10)
    for i in range(10):
        queues[0].put(req(1, i))
    dispatcher.start()
    assert run_state.wait_for_target(timeout=5.0)
    dispatcher.join(2.0)

    enqueued = [e for e, _ in run_state.wait_samples[0]]
    assert enqueued == sorted(enqueued)
    assert len(enqueued) == 10


def test_wakes_on_late_arrival():
    queues, server, run_state, dispatcher = build(target=1)
    dispatcher.start()
    time.sleep(0.05)
    assert dispatcher.state is DispatcherState.AWAITING_REQUEST
    queues[1].put(req(2, 0))
    assert run_state.wait_for_target(timeout=2.0)
    dispatcher.join(2.0)
    assert run_state.processed_per_stream == [0, 1]


def test_stop_signal_ends_idle_dispatcher():
    queues, server, run_state, dispatcher = build(target=100)
    dispatcher.start()
    time.sleep(0.02)
    run_state.request_stop()
    dispatcher.wake()
    dispatcher.join(1.0)
    assert not dispatcher.is_alive()
    assert dispatcher.state is DispatcherState.STOPPED
    assert run_state.processed == 0


def test_next_request_returns_none_once_stopped():
    queues, server, run_state, dispatcher = build(target=5)
    queues[0].put(req(1, 0))
    run_state.request_stop()
    assert dispatcher.next_request() is None
    assert len(queues[0]) == 1
