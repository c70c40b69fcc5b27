from dataclasses import dataclass


@dataclass(frozen=True)
class Request:
    stream_id: int
    arrival_gap: float      # drawn gap (s), informative only
    service_time: float     # drawn service time (s)
    enqueued_at: float      # time.monotonic() when handed to the queue

    def service_ms(self, scale_ms):
        return self.service_time * scale_ms
