"""Parameter space and randomized search."""

from walkforward.optimizer.variables import (
    RangeBoundBool,
    RangeBoundFloat,
    RangeBoundInteger,
    RangeBoundVariables,
)
from walkforward.optimizer.optimizer import MIN_VIABLE_SCORE, OptimizationResult, Optimizer

__all__ = [
    "MIN_VIABLE_SCORE",
    "OptimizationResult",
    "Optimizer",
    "RangeBoundBool",
    "RangeBoundFloat",
    "RangeBoundInteger",
    "RangeBoundVariables",
]
