"""Single-token PCV deposit."""

from loguru import logger

from ..base.chain import Chain
from ..base.contract import transactional
from ..base.core import Core, CoreRef
from ..tokens.erc20 import ERC20Token


class PCVDeposit(CoreRef):
    """
    Holds protocol-controlled value in one token.

    It is the destination of PSM surplus sweeps and the source for drip
    top-ups. Only PCV controllers can move funds out.
    """

    def __init__(self, chain: Chain, core: Core, token: ERC20Token, label: str = "pcv-deposit"):
        super().__init__(chain, core, label)
        self.token = token

    def balance(self) -> int:
        return self.token.balance_of(self.address)

    def balance_reported_in(self) -> str:
        return self.token.address

    @transactional
    def deposit(self) -> None:
        """Accounting hook called after funds arrive; the funds stay here."""
        self.emit("Deposit", amount=self.balance())

    @transactional
    def withdraw(self, to: str, amount: int, *, sender: str) -> None:
        self._only_pcv_controller(sender)
        self.token.transfer(to, amount, sender=self.address)
        self.emit("Withdrawal", caller=sender, to=to, amount=amount)
        logger.debug(f"{self.label} withdrew {amount} {self.token.symbol} to {to}")

    @transactional
    def withdraw_erc20(self, token: ERC20Token, to: str, amount: int, *, sender: str) -> None:
        self._only_pcv_controller(sender)
        token.transfer(to, amount, sender=self.address)
        self.emit("WithdrawERC20", caller=sender, token=token.address, to=to, amount=amount)
