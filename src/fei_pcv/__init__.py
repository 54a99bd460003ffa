"""
Fei PCV - simulation SDK for Fei Protocol's peg stability and PCV guard
contracts.

Contracts run against an in-process `Chain` that provides the clock, the
event log and transaction atomicity. The main entry points:

- PegStabilityModule: fee-adjusted, price-bound swaps between a reserve
  token and FEI, rate limited by a replenishing buffer.
- PCVSentinel: registry and dispatcher for protective guards.
- ProposalDescription: encodes governance proposal batches into calldata.
"""

__version__ = "0.1.0"

from .base import Chain, Core, CoreRef, DripConfig, Event, PSMConfig
from .governance import (
    EncodedCall,
    PermissionsConfig,
    ProposalCommand,
    ProposalDescription,
    apply_permissions,
    validate_permissions,
)
from .oracle import MockOracle, OracleReading, OraclePriceReader
from .sentinel import GuardRegistry, PCVSentinel, PegDeviationGuard, ReserveSweepGuard
from .stabilizer import PCVDeposit, PCVDripController, PegStabilityModule, PSMRouter
from .tokens import ERC20Token, MockToken, StableToken, WETH
from .types import (
    BASIS_POINTS_GRANULARITY,
    SCALE,
    ContractNotFound,
    DripNotEligible,
    FeiPCVError,
    InsufficientAllowance,
    InsufficientBalance,
    InsufficientFunds,
    InvalidParameter,
    MintPaused,
    NoActionNeeded,
    NotAGuard,
    Paused,
    PriceOutOfBounds,
    RateLimitExceeded,
    RedeemPaused,
    ReentrantCall,
    Role,
    SlippageExceeded,
    TimerNotEnded,
    Unauthorized,
)

__all__ = [
    "__version__",
    # Ledger
    "Chain",
    "Event",
    "Core",
    "CoreRef",
    "Role",
    # Config
    "PSMConfig",
    "DripConfig",
    # Tokens & oracles
    "ERC20Token",
    "MockToken",
    "StableToken",
    "WETH",
    "MockOracle",
    "OracleReading",
    "OraclePriceReader",
    # Stabilizer
    "PegStabilityModule",
    "PSMRouter",
    "PCVDeposit",
    "PCVDripController",
    # Sentinel
    "PCVSentinel",
    "GuardRegistry",
    "PegDeviationGuard",
    "ReserveSweepGuard",
    # Governance
    "ProposalCommand",
    "ProposalDescription",
    "EncodedCall",
    "PermissionsConfig",
    "apply_permissions",
    "validate_permissions",
    # Constants
    "SCALE",
    "BASIS_POINTS_GRANULARITY",
    # Errors
    "FeiPCVError",
    "Paused",
    "MintPaused",
    "RedeemPaused",
    "PriceOutOfBounds",
    "SlippageExceeded",
    "RateLimitExceeded",
    "InsufficientFunds",
    "InsufficientBalance",
    "InsufficientAllowance",
    "Unauthorized",
    "InvalidParameter",
    "NotAGuard",
    "NoActionNeeded",
    "ReentrantCall",
    "ContractNotFound",
    "TimerNotEnded",
    "DripNotEligible",
]
