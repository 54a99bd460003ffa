"""Guard registry and dispatcher."""

from .guards import Guard, PegDeviationGuard, ReserveSweepGuard
from .registry import GuardRegistry
from .sentinel import PCVSentinel

__all__ = ["Guard", "GuardRegistry", "PCVSentinel", "PegDeviationGuard", "ReserveSweepGuard"]
