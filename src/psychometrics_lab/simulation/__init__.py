"""
Simulation engines for the psychometrics lab.

Turns three slider values (sample size, item cohesion, construct quality)
and the current item set into a coherent bundle of psychometric indices.
The numbers are fabricated to look plausible and stay internally
consistent; this is a teaching tool, not a statistics package.
"""

from psychometrics_lab.simulation.config import (
    PresetConfig,
    SimulationParameters,
)
from psychometrics_lab.simulation.data_models import (
    DistributionPoint,
    FitIndices,
    GroupComparison,
    InformationPoint,
    ReliabilityIndices,
    SimulationResult,
    ValidityIndices,
)
from psychometrics_lab.simulation.engine import run_simulation
from psychometrics_lab.simulation.history import RunHistory, SimulationRun

__all__ = [
    "DistributionPoint",
    "FitIndices",
    "GroupComparison",
    "InformationPoint",
    "PresetConfig",
    "ReliabilityIndices",
    "RunHistory",
    "SimulationParameters",
    "SimulationResult",
    "SimulationRun",
    "ValidityIndices",
    "run_simulation",
]
