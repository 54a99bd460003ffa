"""Timed top-ups of a PSM from a PCV deposit."""

from loguru import logger

from ..base.chain import Chain
from ..base.config import DripConfig
from ..base.contract import transactional
from ..base.core import Core, CoreRef
from ..types import DripNotEligible, InvalidParameter, Paused, TimerNotEnded
from .pcv_deposit import PCVDeposit
from .psm import PegStabilityModule


class Timer:
    """Countdown measured against the chain clock."""

    def __init__(self, chain: Chain, duration: int):
        if duration <= 0:
            raise InvalidParameter("Timed: zero duration")
        self.chain = chain
        self.duration = duration
        self.start_time = chain.timestamp

    def time_since_start(self) -> int:
        return self.chain.timestamp - self.start_time

    def remaining_time(self) -> int:
        return max(self.duration - self.time_since_start(), 0)

    def is_time_ended(self) -> bool:
        return self.remaining_time() == 0

    def restart(self) -> None:
        self.start_time = self.chain.timestamp

    def set_duration(self, duration: int) -> None:
        if duration <= 0:
            raise InvalidParameter("Timed: zero duration")
        self.duration = duration


class PCVDripController(CoreRef):
    """
    Moves `drip_amount` reserves from a PCV deposit into a PSM once per
    period, whenever the PSM balance has fallen below that amount.

    The controller withdraws from the source, so it must hold PCV_CONTROLLER.
    """

    def __init__(
        self,
        chain: Chain,
        core: Core,
        source: PCVDeposit,
        target: PegStabilityModule,
        config: DripConfig,
        label: str = "pcv-drip-controller",
    ):
        super().__init__(chain, core, label)
        self.source = source
        self.target = target
        self.drip_amount = config.drip_amount
        self._timer = Timer(chain, config.frequency)

    @property
    def duration(self) -> int:
        return self._timer.duration

    def is_time_ended(self) -> bool:
        return self._timer.is_time_ended()

    def remaining_time(self) -> int:
        return self._timer.remaining_time()

    def drip_eligible(self) -> bool:
        return self.target.balance() < self.drip_amount

    @transactional
    def drip(self, *, sender: str) -> int:
        if self.paused:
            raise Paused("Pausable: paused")
        if not self.is_time_ended():
            raise TimerNotEnded("Timed: time not ended")
        if not self.drip_eligible():
            raise DripNotEligible("PCVDripController: not eligible")

        self._timer.restart()
        self.source.withdraw(self.target.address, self.drip_amount, sender=self.address)
        self.emit("Dripped", source=self.source.address, target=self.target.address, amount=self.drip_amount)
        logger.debug(f"Dripped {self.drip_amount} from {self.source.label} to {self.target.label}")
        return self.drip_amount

    @transactional
    def set_drip_amount(self, drip_amount: int, *, sender: str) -> None:
        self._only_governor_or_admin(sender)
        if drip_amount <= 0:
            raise InvalidParameter("PCVDripController: invalid drip amount")
        old = self.drip_amount
        self.drip_amount = drip_amount
        self.emit("DripAmountUpdate", old=old, new=drip_amount)
        logger.info(f"{self.label} drip amount {old} -> {drip_amount}")

    @transactional
    def set_duration(self, duration: int, *, sender: str) -> None:
        self._only_governor_or_admin(sender)
        old = self.duration
        self._timer.set_duration(duration)
        self.emit("DurationUpdate", old=old, new=duration)
