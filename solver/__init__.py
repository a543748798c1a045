"""Solver-Modul (Greedy-Phasenplanung)."""

from .scheduler import (
    PhaseScheduler, PlanningContext, SchedulerState, SchedulingInfeasibleError,
)
from .collision import CollisionChecker
from .assembly import PhaseRecord, assemble_segments

__all__ = [
    "PhaseScheduler",
    "PlanningContext",
    "SchedulerState",
    "SchedulingInfeasibleError",
    "CollisionChecker",
    "PhaseRecord",
    "assemble_segments",
]
