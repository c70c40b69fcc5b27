import pytest

from dualqueue.model.parameters import (
    RunStatus, SimulationMetrics, SimulationParameters, ValidationError, parse_parameters
)

VALID = {
    "arrival_rate_1": "5",
    "service_rate_1": "10",
    "arrival_rate_2": " 3.5 ",
    "service_rate_2": "8",
    "target_processed": "50",
}


def test_parse_valid_form():
    params = parse_parameters(VALID)
    assert params == SimulationParameters(5.0, 10.0, 3.5, 8.0, 50)
    assert isinstance(params.target_processed, int)


@pytest.mark.parametrize("field, value, fragment", [
    ("arrival_rate_1", "abc", "arrival rate of generator 1"),
    ("service_rate_1", "", "service rate of generator 1"),
    ("arrival_rate_2", "nan", "arrival rate of generator 2"),
    ("service_rate_2", "0", "service rate of generator 2"),
    ("target_processed", "2.5", "number of requests"),
    ("target_processed", "0", "number of requests"),
    ("arrival_rate_1", "-1", "must be positive"),
])
def test_invalid_field_named_in_message(field, value, fragment):
    raw = dict(VALID, **{field: value})
    with pytest.raises(ValidationError) as exc:
        parse_parameters(raw)
    assert fragment in str(exc.value)


def test_first_bad_field_wins():
    raw = dict(VALID, service_rate_1="x", target_processed="y")
    with pytest.raises(ValidationError, match="service rate of generator 1"):
        parse_parameters(raw)


def test_missing_field_is_a_validation_error():
    raw = dict(VALID)
    del raw["service_rate_2"]
    with pytest.raises(ValidationError):
        parse_parameters(raw)


def test_scaled_only_touches_arrival_rates():
    p = SimulationParameters(2, 10, 1, 8, 20).scaled(1.5, target_processed=7)
    assert p == SimulationParameters(3.0, 10, 1.5, 8, 7)


def test_run_status_rendering():
    assert repr(RunStatus.completed(12)) == "Completed(12)"
    assert str(RunStatus.completed(12)) == "Simulation completed. Processed 12 requests"
    assert str(RunStatus.validation_error("bad")) == "Error: bad"
    assert RunStatus.running() == RunStatus(RunStatus.RUNNING)
    assert RunStatus.not_started() != RunStatus.running()


def test_metrics_row_keeps_missing_values():
    row = SimulationMetrics(offered_load=0.5).as_row()
    assert row["offered_load"] == 0.5
    assert row["utilization"] is None
    assert row["avg_wait_1"] is None
