"""Peg stability module and its building blocks."""

from .bounds import PriceBounds
from .drip import PCVDripController, Timer
from .fees import FeeCalculator
from .pcv_deposit import PCVDeposit
from .psm import PegStabilityModule
from .rate_limiter import RateLimiter
from .reserves import ReserveManager
from .router import PSMRouter

__all__ = [
    "PriceBounds",
    "FeeCalculator",
    "RateLimiter",
    "ReserveManager",
    "PCVDeposit",
    "PegStabilityModule",
    "PSMRouter",
    "PCVDripController",
    "Timer",
]
