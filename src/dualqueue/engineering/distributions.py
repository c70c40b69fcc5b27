import numpy as np

from dualqueue.model.parameters import ValidationError


def get_interarrival_time(rng, arrival_rate):
    # U[1/λ, 2/λ]
    return rng.uniform(1.0 / arrival_rate, 2.0 / arrival_rate)


def get_service_time(rng, service_rate):
    # numpy takes the mean, not the rate
    return rng.exponential(1.0 / service_rate)


class RandomProcess:
    """
    Sample source for one stream: uniform arrival gaps on [1/λ, 2/λ] and
    exponential service times with rate μ.

    Each instance owns its numpy generator (never shared between threads)
    and is never seeded, so draws are not reproducible across runs.
    """

    def __init__(self, arrival_rate, service_rate, rng=None):
        if not arrival_rate > 0:
            raise ValidationError(f"arrival rate must be positive, got {arrival_rate}")
        if not service_rate > 0:
            raise ValidationError(f"service rate must be positive, got {service_rate}")
        self.arrival_rate = float(arrival_rate)
        self.service_rate = float(service_rate)
        self.rng = rng if rng is not None else np.random.default_rng()

    def next_arrival_gap(self):
        return float(get_interarrival_time(self.rng, self.arrival_rate))

    def next_service_time(self):
        return float(get_service_time(self.rng, self.service_rate))

    def draw(self):
        return self.next_arrival_gap(), self.next_service_time()
