"""Guard interface and the protocol guards shipped with the sentinel."""

from typing import Protocol, runtime_checkable

from ..base.chain import Chain
from ..base.contract import Contract
from ..stabilizer.psm import PegStabilityModule


@runtime_checkable
class Guard(Protocol):
    """
    A protective routine the sentinel can dispatch.

    `check` says whether action is warranted; `action` performs it and may
    raise.
    """

    address: str

    def check(self) -> bool:
        ...

    def action(self) -> None:
        ...


class PegDeviationGuard(Contract):
    """
    Halts a PSM whose oracle quote has left the price corridor.

    Pauses both minting and redemption. The pause calls are made as
    `executor`, normally the sentinel, which must hold GUARDIAN.
    """

    def __init__(self, chain: Chain, psm: PegStabilityModule, executor: str, label: str = "peg-deviation-guard"):
        super().__init__(chain, label)
        self.psm = psm
        self.executor = executor

    def check(self) -> bool:
        if self.psm.mint_paused and self.psm.redeem_paused:
            return False
        return not self.psm.is_price_valid()

    def action(self) -> None:
        if not self.psm.mint_paused:
            self.psm.pause_mint(sender=self.executor)
        if not self.psm.redeem_paused:
            self.psm.pause_redeem(sender=self.executor)


class ReserveSweepGuard(Contract):
    """Sweeps PSM reserves above the threshold into its PCV deposit."""

    def __init__(self, chain: Chain, psm: PegStabilityModule, label: str = "reserve-sweep-guard"):
        super().__init__(chain, label)
        self.psm = psm

    def check(self) -> bool:
        return self.psm.has_surplus()

    def action(self) -> None:
        self.psm.allocate_surplus(sender=self.address)
