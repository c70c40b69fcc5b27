from dualqueue.model.parameters import (
    SimulationParameters, SimulationMetrics, RunStatus, ValidationError, parse_parameters
)
from dualqueue.controller.simulation import SimulationEngine, run_simulation

__all__ = [
    "SimulationParameters", "SimulationMetrics", "RunStatus", "ValidationError",
    "parse_parameters", "SimulationEngine", "run_simulation",
]
