"""Reserve surplus tracking and sweeping."""

from loguru import logger

from ..tokens.erc20 import ERC20Token
from ..types import InvalidParameter
from .pcv_deposit import PCVDeposit


class ReserveManager:
    """
    Keeps the reserve balance of `holder` at `reserves_threshold`.

    Anything above the threshold is surplus and is swept to the surplus
    target on demand.
    """

    def __init__(
        self,
        token: ERC20Token,
        holder: str,
        reserves_threshold: int,
        surplus_target: PCVDeposit,
    ):
        if reserves_threshold <= 0:
            raise InvalidParameter("PegStabilityModule: Invalid new reserves threshold")
        self.token = token
        self.holder = holder
        self.reserves_threshold = reserves_threshold
        self.surplus_target = surplus_target

    def reserve_balance(self) -> int:
        return self.token.balance_of(self.holder)

    def surplus(self) -> int:
        return max(self.reserve_balance() - self.reserves_threshold, 0)

    def has_surplus(self) -> bool:
        return self.reserve_balance() > self.reserves_threshold

    def allocate_surplus(self) -> int:
        """Sweep the surplus and return the amount moved (0 when there is none)."""
        amount = self.surplus()
        if amount == 0:
            return 0
        self.token.transfer(self.surplus_target.address, amount, sender=self.holder)
        self.surplus_target.deposit()
        logger.debug(f"Swept {amount} {self.token.symbol} surplus to {self.surplus_target.address}")
        return amount

    def set_reserves_threshold(self, reserves_threshold: int) -> None:
        if reserves_threshold <= 0:
            raise InvalidParameter("PegStabilityModule: Invalid new reserves threshold")
        self.reserves_threshold = reserves_threshold

    def set_surplus_target(self, surplus_target: PCVDeposit) -> None:
        if surplus_target is None:
            raise InvalidParameter("PegStabilityModule: Invalid new surplus target")
        self.surplus_target = surplus_target
