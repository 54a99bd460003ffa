"""
Price-bound Peg Stability Module.

Swaps a reserve token for FEI and back at the oracle price, net of a fee,
while the oracle quote sits inside the floor/ceiling corridor. FEI minting
draws down a replenishing buffer; reserves above a threshold are swept to
a PCV deposit.
"""

from typing import Tuple

from loguru import logger

from ..base.chain import Chain
from ..base.config import PSMConfig
from ..base.contract import nonreentrant, transactional
from ..base.core import Core, CoreRef
from ..oracle.oracle import Oracle, OracleReading
from ..oracle.reader import OraclePriceReader
from ..tokens.erc20 import ERC20Token, StableToken
from ..types import (
    InvalidParameter,
    MintPaused,
    Paused,
    RedeemPaused,
    SCALE,
    SlippageExceeded,
)
from .bounds import PriceBounds
from .fees import FeeCalculator
from .pcv_deposit import PCVDeposit
from .rate_limiter import RateLimiter
from .reserves import ReserveManager


class PegStabilityModule(CoreRef):
    """
    PSM for one reserve token.

    Usage:
        config = PSMConfig.create_price_bound_psm(mint_fee_basis_points=30)
        psm = PegStabilityModule(chain, core, fei, dai, oracle, pcv_deposit, config)
        core.grant_minter(psm.address, sender=governor)

        dai.approve(psm.address, amount, sender=user)
        psm.mint(user, amount, psm.get_mint_amount_out(amount), sender=user)
    """

    def __init__(
        self,
        chain: Chain,
        core: Core,
        fei: StableToken,
        token: ERC20Token,
        oracle: Oracle,
        surplus_target: PCVDeposit,
        config: PSMConfig,
        label: str = "psm",
    ):
        super().__init__(chain, core, label)
        self.fei = fei
        self.token = token
        self.mint_paused = False
        self.redeem_paused = False

        self._reader = OraclePriceReader(oracle, config.do_invert, config.decimals_normalizer)
        self._bounds = PriceBounds(config.floor_basis_points, config.ceiling_basis_points)
        self._fees = FeeCalculator(
            config.mint_fee_basis_points,
            config.redeem_fee_basis_points,
            config.max_fee_basis_points,
        )
        self._rate_limiter = RateLimiter(
            chain,
            config.rate_limit_per_second,
            config.buffer_cap,
            config.max_rate_limit_per_second,
        )
        self._reserves = ReserveManager(token, self.address, config.reserves_threshold, surplus_target)

        logger.info(
            f"Deployed {label} for {token.symbol}: fees {config.mint_fee_basis_points}/"
            f"{config.redeem_fee_basis_points} bp, corridor "
            f"{config.floor_basis_points}-{config.ceiling_basis_points} bp"
        )

    # ---------- Views ----------

    @property
    def oracle(self) -> Oracle:
        return self._reader.oracle

    @property
    def do_invert(self) -> bool:
        return self._reader.do_invert

    @property
    def decimals_normalizer(self) -> int:
        return self._reader.decimals_normalizer

    @property
    def floor(self) -> int:
        return self._bounds.floor

    @property
    def ceiling(self) -> int:
        return self._bounds.ceiling

    @property
    def floor_basis_points(self) -> int:
        return self._bounds.floor_basis_points

    @property
    def ceiling_basis_points(self) -> int:
        return self._bounds.ceiling_basis_points

    @property
    def mint_fee_basis_points(self) -> int:
        return self._fees.mint_fee_basis_points

    @property
    def redeem_fee_basis_points(self) -> int:
        return self._fees.redeem_fee_basis_points

    @property
    def max_fee_basis_points(self) -> int:
        return self._fees.max_fee_basis_points

    @property
    def reserves_threshold(self) -> int:
        return self._reserves.reserves_threshold

    @property
    def surplus_target(self) -> PCVDeposit:
        return self._reserves.surplus_target

    @property
    def rate_limit_per_second(self) -> int:
        return self._rate_limiter.rate_limit_per_second

    @property
    def buffer_cap(self) -> int:
        return self._rate_limiter.buffer_cap

    def buffer(self) -> int:
        return self._rate_limiter.buffer()

    def balance(self) -> int:
        return self._reserves.reserve_balance()

    def balance_reported_in(self) -> str:
        return self.token.address

    def resistant_balance_and_fei(self) -> Tuple[int, int]:
        return self.balance(), 0

    def has_surplus(self) -> bool:
        return self._reserves.has_surplus()

    def is_price_valid(self) -> bool:
        return self._bounds.is_valid(self._reader.read_quote())

    def read_oracle(self) -> int:
        """Trade price after the corridor check, inversion and normalization."""
        reading: OracleReading = self._reader.read_quote()
        self._bounds.validate(reading)
        return self._reader.adjust(reading.price)

    def get_mint_amount_out(self, amount_in: int) -> int:
        """FEI received for `amount_in` reserve units."""
        price = self.read_oracle()
        net = self._fees.apply_mint_fee(amount_in)
        return net * price // SCALE

    def get_redeem_amount_out(self, amount_fei_in: int) -> int:
        """Reserve units received for `amount_fei_in` FEI."""
        price = self.read_oracle()
        net = self._fees.apply_redeem_fee(amount_fei_in)
        return net * SCALE // price

    def get_max_mint_amount_out(self) -> int:
        return self.buffer()

    # ---------- Swaps ----------

    @transactional
    @nonreentrant
    def mint(self, to: str, amount_in: int, min_amount_out: int, *, sender: str) -> int:
        """Pull `amount_in` reserves from `sender` and mint FEI to `to`."""
        if self.paused:
            raise Paused("Pausable: paused")
        if self.mint_paused:
            raise MintPaused("PegStabilityModule: Minting paused")

        amount_out = self.get_mint_amount_out(amount_in)
        if amount_out < min_amount_out:
            raise SlippageExceeded("PegStabilityModule: Mint not enough out")

        self.token.transfer_from(sender, self.address, amount_in, sender=self.address)
        self._rate_limiter.deplete(amount_out)
        self.fei.mint(to, amount_out, sender=self.address)

        self.emit("Mint", to=to, amount_in=amount_in, amount_out=amount_out)
        logger.debug(f"{self.label} mint: {amount_in} {self.token.symbol} -> {amount_out} FEI for {to}")
        return amount_out

    @transactional
    @nonreentrant
    def redeem(self, to: str, amount_fei_in: int, min_amount_out: int, *, sender: str) -> int:
        """Pull `amount_fei_in` FEI from `sender`, burn it and send reserves to `to`."""
        if self.paused:
            raise Paused("Pausable: paused")
        if self.redeem_paused:
            raise RedeemPaused("PegStabilityModule: Redeem paused")

        amount_out = self.get_redeem_amount_out(amount_fei_in)
        if amount_out < min_amount_out:
            raise SlippageExceeded("PegStabilityModule: Redeem not enough out")

        self.fei.transfer_from(sender, self.address, amount_fei_in, sender=self.address)
        self.token.transfer(to, amount_out, sender=self.address)
        self._burn_fei_held()

        self.emit("Redeem", to=to, amount_fei_in=amount_fei_in, amount_out=amount_out)
        logger.debug(f"{self.label} redeem: {amount_fei_in} FEI -> {amount_out} {self.token.symbol} for {to}")
        return amount_out

    def _burn_fei_held(self) -> None:
        held = self.fei.balance_of(self.address)
        if held > 0:
            self.fei.burn(held, sender=self.address)

    # ---------- Surplus ----------

    @transactional
    def allocate_surplus(self, *, sender: str) -> int:
        amount = self._reserves.allocate_surplus()
        if amount > 0:
            self.emit("AllocateSurplus", caller=sender, amount=amount)
        return amount

    @transactional
    def deposit(self, *, sender: str) -> int:
        return self.allocate_surplus(sender=sender)

    # ---------- Pause controls ----------

    @transactional
    def pause_mint(self, *, sender: str) -> None:
        self._only_governor_or_guardian_or_admin(sender)
        self.mint_paused = True
        self.emit("MintingPaused", account=sender)
        logger.info(f"{self.label} minting paused by {sender}")

    @transactional
    def unpause_mint(self, *, sender: str) -> None:
        self._only_governor_or_guardian_or_admin(sender)
        self.mint_paused = False
        self.emit("MintingUnpaused", account=sender)
        logger.info(f"{self.label} minting unpaused by {sender}")

    @transactional
    def pause_redeem(self, *, sender: str) -> None:
        self._only_governor_or_guardian_or_admin(sender)
        self.redeem_paused = True
        self.emit("RedemptionsPaused", account=sender)
        logger.info(f"{self.label} redemptions paused by {sender}")

    @transactional
    def unpause_redeem(self, *, sender: str) -> None:
        self._only_governor_or_guardian_or_admin(sender)
        self.redeem_paused = False
        self.emit("RedemptionsUnpaused", account=sender)
        logger.info(f"{self.label} redemptions unpaused by {sender}")

    # ---------- Governance ----------

    @transactional
    def set_mint_fee(self, fee_basis_points: int, *, sender: str) -> None:
        self._only_governor_or_admin(sender)
        old = self.mint_fee_basis_points
        self._fees.set_mint_fee(fee_basis_points)
        self.emit("MintFeeUpdate", old=old, new=fee_basis_points)
        logger.info(f"{self.label} mint fee {old} -> {fee_basis_points} bp")

    @transactional
    def set_redeem_fee(self, fee_basis_points: int, *, sender: str) -> None:
        self._only_governor_or_admin(sender)
        old = self.redeem_fee_basis_points
        self._fees.set_redeem_fee(fee_basis_points)
        self.emit("RedeemFeeUpdate", old=old, new=fee_basis_points)
        logger.info(f"{self.label} redeem fee {old} -> {fee_basis_points} bp")

    @transactional
    def set_reserves_threshold(self, reserves_threshold: int, *, sender: str) -> None:
        self._only_governor_or_admin(sender)
        old = self.reserves_threshold
        self._reserves.set_reserves_threshold(reserves_threshold)
        self.emit("ReservesThresholdUpdate", old=old, new=reserves_threshold)
        logger.info(f"{self.label} reserves threshold {old} -> {reserves_threshold}")

    @transactional
    def set_oracle_floor_basis_points(self, floor_basis_points: int, *, sender: str) -> None:
        self._only_governor_or_admin(sender)
        old = self.floor_basis_points
        self._bounds.set_floor(floor_basis_points)
        self.emit("OracleFloorUpdate", old=old, new=floor_basis_points)
        logger.info(f"{self.label} oracle floor {old} -> {floor_basis_points} bp")

    @transactional
    def set_oracle_ceiling_basis_points(self, ceiling_basis_points: int, *, sender: str) -> None:
        self._only_governor_or_admin(sender)
        old = self.ceiling_basis_points
        self._bounds.set_ceiling(ceiling_basis_points)
        self.emit("OracleCeilingUpdate", old=old, new=ceiling_basis_points)
        logger.info(f"{self.label} oracle ceiling {old} -> {ceiling_basis_points} bp")

    @transactional
    def set_surplus_target(self, surplus_target: PCVDeposit, *, sender: str) -> None:
        self._only_governor_or_admin(sender)
        old = self.surplus_target
        self._reserves.set_surplus_target(surplus_target)
        self.emit("SurplusTargetUpdate", old=old.address, new=surplus_target.address)
        logger.info(f"{self.label} surplus target -> {surplus_target.address}")

    @transactional
    def set_rate_limit_per_second(self, rate_limit_per_second: int, *, sender: str) -> None:
        self._only_governor_or_admin(sender)
        old = self.rate_limit_per_second
        self._rate_limiter.set_rate_limit_per_second(rate_limit_per_second)
        self.emit("RateLimitPerSecondUpdate", old=old, new=rate_limit_per_second)

    @transactional
    def set_buffer_cap(self, buffer_cap: int, *, sender: str) -> None:
        self._only_governor_or_admin(sender)
        old = self.buffer_cap
        self._rate_limiter.set_buffer_cap(buffer_cap)
        self.emit("BufferCapUpdate", old=old, new=buffer_cap)

    @transactional
    def set_oracle(self, oracle: Oracle, *, sender: str) -> None:
        self._only_governor(sender)
        if oracle is None:
            raise InvalidParameter("OracleRef: zero address")
        old = self.oracle
        self._reader.oracle = oracle
        self.emit("OracleUpdate", old=old.address, new=oracle.address)
        logger.info(f"{self.label} oracle -> {oracle.address}")

    @transactional
    def set_do_invert(self, do_invert: bool, *, sender: str) -> None:
        self._only_governor(sender)
        old = self.do_invert
        self._reader.do_invert = do_invert
        self.emit("InvertUpdate", old=old, new=do_invert)

    @transactional
    def set_decimals_normalizer(self, decimals_normalizer: int, *, sender: str) -> None:
        self._only_governor(sender)
        if abs(decimals_normalizer) > 36:
            raise InvalidParameter("OracleRef: decimals normalizer out of range")
        old = self.decimals_normalizer
        self._reader.decimals_normalizer = decimals_normalizer
        self.emit("DecimalsNormalizerUpdate", old=old, new=decimals_normalizer)

    # ---------- PCV movement ----------

    @transactional
    def withdraw(self, to: str, amount: int, *, sender: str) -> None:
        """Move reserves out; does not touch the buffer."""
        self._only_pcv_controller(sender)
        self.token.transfer(to, amount, sender=self.address)
        self.emit("WithdrawERC20", caller=sender, token=self.token.address, to=to, amount=amount)
        logger.info(f"{self.label} withdrew {amount} {self.token.symbol} to {to}")

    @transactional
    def withdraw_erc20(self, token: ERC20Token, to: str, amount: int, *, sender: str) -> None:
        self._only_pcv_controller(sender)
        token.transfer(to, amount, sender=self.address)
        self.emit("WithdrawERC20", caller=sender, token=token.address, to=to, amount=amount)
        logger.info(f"{self.label} withdrew {amount} {token.symbol} to {to}")
