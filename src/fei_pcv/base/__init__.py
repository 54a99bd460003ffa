"""Ledger, contract and access-control primitives."""

from .chain import Chain, Event
from .contract import Contract, nonreentrant, transactional
from .core import Core, CoreRef, has_role, require_role
from .config import DripConfig, PSMConfig

__all__ = [
    "Chain",
    "Event",
    "Contract",
    "nonreentrant",
    "transactional",
    "Core",
    "CoreRef",
    "has_role",
    "require_role",
    "DripConfig",
    "PSMConfig",
]
