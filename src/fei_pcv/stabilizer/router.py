"""Native-ETH router in front of a WETH PSM."""

from typing import Optional

from loguru import logger

from ..base.chain import Chain
from ..base.contract import Contract, nonreentrant, transactional
from ..tokens.erc20 import StableToken, WETH
from ..types import InvalidParameter, MAX_UINT256
from .psm import PegStabilityModule


class PSMRouter(Contract):
    """
    Lets users mint FEI with raw ETH and redeem FEI straight to ETH.

    The router wraps and unwraps through WETH and trades against the PSM on
    the user's behalf. It holds standing max approvals to the PSM for both
    WETH and FEI, granted at deployment.
    """

    def __init__(self, chain: Chain, psm: PegStabilityModule, weth: WETH, fei: StableToken, label: str = "psm-router"):
        super().__init__(chain, label)
        self.psm = psm
        self.weth = weth
        self.fei = fei
        weth.approve(psm.address, MAX_UINT256, sender=self.address)
        fei.approve(psm.address, MAX_UINT256, sender=self.address)

    def get_mint_amount_out(self, amount_eth_in: int) -> int:
        return self.psm.get_mint_amount_out(amount_eth_in)

    def get_redeem_amount_out(self, amount_fei_in: int) -> int:
        return self.psm.get_redeem_amount_out(amount_fei_in)

    def get_max_mint_amount_out(self) -> int:
        return self.psm.buffer()

    def _ensure(self, deadline: Optional[int]) -> None:
        if deadline is not None and self.chain.timestamp > deadline:
            raise InvalidParameter("PSMRouter: order expired")

    @transactional
    @nonreentrant
    def mint(
        self,
        to: str,
        min_amount_out: int,
        value: int,
        *,
        sender: str,
        deadline: Optional[int] = None,
    ) -> int:
        """Wrap `value` wei from `sender` and mint FEI to `to`."""
        self._ensure(deadline)
        self.chain.transfer_eth(sender, self.address, value)
        self.weth.deposit(value, sender=self.address)
        amount_out = self.psm.mint(to, value, min_amount_out, sender=self.address)
        logger.debug(f"Router minted {amount_out} FEI to {to} for {value} wei")
        return amount_out

    @transactional
    @nonreentrant
    def redeem(
        self,
        to: str,
        amount_fei_in: int,
        min_amount_out: int,
        *,
        sender: str,
        deadline: Optional[int] = None,
    ) -> int:
        """Redeem `amount_fei_in` FEI from `sender` and send the ETH to `to`."""
        self._ensure(deadline)
        self.fei.transfer_from(sender, self.address, amount_fei_in, sender=self.address)
        amount_out = self.psm.redeem(self.address, amount_fei_in, min_amount_out, sender=self.address)
        self.weth.withdraw(amount_out, sender=self.address)
        self.chain.transfer_eth(self.address, to, amount_out)
        logger.debug(f"Router redeemed {amount_fei_in} FEI for {amount_out} wei to {to}")
        return amount_out
