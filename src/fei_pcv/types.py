"""
Core types for the Fei PCV simulation SDK.

Shared constants, the role enumeration used by the access-control registry
and the error taxonomy raised by every simulated contract. Errors carry the
revert string the on-chain contract would produce so tests can match on it.
"""

from enum import Enum

from eth_utils import keccak


# Fixed-point base used for oracle prices (Decimal.D256 in the contracts)
SCALE = 10**18

BASIS_POINTS_GRANULARITY = 10_000

MAX_FEE_BASIS_POINTS = 500

DEFAULT_FLOOR_BASIS_POINTS = 9_800
DEFAULT_CEILING_BASIS_POINTS = 10_200

MAX_RATE_LIMIT_PER_SECOND = 10_000 * SCALE

MAX_UINT256 = 2**256 - 1


class Role(str, Enum):
    """Roles tracked by the Core permissions registry."""
    GOVERN = "GOVERN_ROLE"
    GUARDIAN = "GUARDIAN_ROLE"
    PCV_CONTROLLER = "PCV_CONTROLLER_ROLE"
    MINTER = "MINTER_ROLE"
    BURNER = "BURNER_ROLE"
    PSM_ADMIN = "PSM_ADMIN_ROLE"

    @property
    def role_id(self) -> str:
        """bytes32 role identifier, keccak256 of the role name."""
        return "0x" + keccak(text=self.value).hex()


class FeiPCVError(Exception):
    """
    Base class for every simulated revert.

    The message is the revert reason string of the equivalent contract call.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Paused(FeiPCVError):
    """Operation attempted while the contract is paused."""


class MintPaused(Paused):
    """Mint attempted while minting is paused."""


class RedeemPaused(Paused):
    """Redeem attempted while redemptions are paused."""


class PriceOutOfBounds(FeiPCVError):
    """Oracle quote is invalid or outside the floor/ceiling corridor."""


class SlippageExceeded(FeiPCVError):
    """Computed output is below the caller's minimum."""


class RateLimitExceeded(FeiPCVError):
    """Requested mint exceeds the current buffer."""


class InsufficientFunds(FeiPCVError):
    """Token transfer or burn cannot be satisfied."""


class InsufficientBalance(InsufficientFunds):
    pass


class InsufficientAllowance(InsufficientFunds):
    pass


class Unauthorized(FeiPCVError):
    """Caller lacks the role required for the operation."""


class InvalidParameter(FeiPCVError):
    """A setter or input was given a value outside its domain."""


class NotAGuard(FeiPCVError):
    pass


class NoActionNeeded(FeiPCVError):
    pass


class ReentrantCall(FeiPCVError):
    pass


class ContractNotFound(FeiPCVError):
    """No contract is deployed at the requested address."""


class TimerNotEnded(FeiPCVError):
    pass


class DripNotEligible(FeiPCVError):
    pass
