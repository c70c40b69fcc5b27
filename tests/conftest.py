import pytest

from dualqueue.model.parameters import SimulationParameters

# 1/5 of the lab cadence so a 50-request run takes a fraction of a second
FAST = {"arrival_scale_ms": 20, "service_scale_ms": 20, "poll": 0.01}


@pytest.fixture
def fast():
    return dict(FAST)


@pytest.fixture
def scenario_a():
    return SimulationParameters(arrival_rate_1=5, service_rate_1=10,
                                arrival_rate_2=3, service_rate_2=8,
                                target_processed=50)
