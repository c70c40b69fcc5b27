import math
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional


class ValidationError(ValueError):
    """Malformed or non-positive simulation parameters."""


@dataclass(frozen=True)
class SimulationParameters:
    arrival_rate_1: float
    service_rate_1: float
    arrival_rate_2: float
    service_rate_2: float
    target_processed: int

    def rates(self, stream_id: int):
        if stream_id == 1:
            return self.arrival_rate_1, self.service_rate_1
        if stream_id == 2:
            return self.arrival_rate_2, self.service_rate_2
        raise ValueError(f"unknown stream {stream_id}")

    def scaled(self, factor: float, target_processed: Optional[int] = None) -> "SimulationParameters":
        return SimulationParameters(
            arrival_rate_1=self.arrival_rate_1 * factor,
            service_rate_1=self.service_rate_1,
            arrival_rate_2=self.arrival_rate_2 * factor,
            service_rate_2=self.service_rate_2,
            target_processed=self.target_processed if target_processed is None else target_processed,
        )


@dataclass
class SimulationMetrics:
    offered_load: float
    actual_utilization: Optional[float] = None
    average_wait: List[Optional[float]] = field(default_factory=lambda: [None, None])

    processed_count: int = 0
    processed_per_stream: List[int] = field(default_factory=lambda: [0, 0])
    elapsed_ms: float = 0.0
    busy_ms: float = 0.0
    # wait sum / that stream's own count (average_wait divides by the total)
    own_average_wait: List[Optional[float]] = field(default_factory=lambda: [None, None])
    wait_half_width: List[Optional[float]] = field(default_factory=lambda: [None, None])

    def as_row(self) -> Dict[str, Optional[float]]:
        return {
            "offered_load": self.offered_load,
            "utilization": self.actual_utilization,
            "avg_wait_1": self.average_wait[0],
            "avg_wait_2": self.average_wait[1],
            "own_avg_wait_1": self.own_average_wait[0],
            "own_avg_wait_2": self.own_average_wait[1],
            "processed": self.processed_count,
            "elapsed_ms": self.elapsed_ms,
        }


class RunStatus:
    NOT_STARTED = "NotStarted"
    RUNNING = "Running"
    COMPLETED = "Completed"
    VALIDATION_ERROR = "ValidationError"

    def __init__(self, state, processed=None, message=None):
        self.state = state
        self.processed = processed
        self.message = message

    @classmethod
    def not_started(cls):
        return cls(cls.NOT_STARTED)

    @classmethod
    def running(cls):
        return cls(cls.RUNNING)

    @classmethod
    def completed(cls, processed):
        return cls(cls.COMPLETED, processed=processed)

    @classmethod
    def validation_error(cls, message):
        return cls(cls.VALIDATION_ERROR, message=message)

    def __eq__(self, other):
        if not isinstance(other, RunStatus):
            return NotImplemented
        return (self.state, self.processed, self.message) == (other.state, other.processed, other.message)

    def __repr__(self):
        if self.state == self.COMPLETED:
            return f"{self.state}({self.processed})"
        if self.state == self.VALIDATION_ERROR:
            return f"{self.state}({self.message!r})"
        return self.state

    def __str__(self):
        if self.state == self.NOT_STARTED:
            return "Waiting for the simulation to start..."
        if self.state == self.RUNNING:
            return "Simulation running"
        if self.state == self.COMPLETED:
            return f"Simulation completed. Processed {self.processed} requests"
        return f"Error: {self.message}"


# (field, label used in the error message, parser)
_FIELDS = [
    ("arrival_rate_1", "arrival rate of generator 1", float),
    ("service_rate_1", "service rate of generator 1", float),
    ("arrival_rate_2", "arrival rate of generator 2", float),
    ("service_rate_2", "service rate of generator 2", float),
    ("target_processed", "number of requests to process", int),
]


def parse_parameters(raw: Mapping[str, object]) -> SimulationParameters:
    values = {}
    for name, label, parser in _FIELDS:
        text = raw.get(name)
        try:
            value = parser(str(text).strip())
        except (TypeError, ValueError):
            raise ValidationError(f"enter a valid value for the {label}.") from None
        if isinstance(value, float) and not math.isfinite(value):
            raise ValidationError(f"enter a valid value for the {label}.")
        if value <= 0:
            raise ValidationError(f"the {label} must be positive.")
        values[name] = value
    return SimulationParameters(**values)
