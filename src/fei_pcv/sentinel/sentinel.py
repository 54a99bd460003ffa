"""
PCV Sentinel: a registry of guards and a permissionless dispatcher.

Guardians knight guard contracts. Anyone may then ask the sentinel to
`protec` with a guard; if the guard's check passes, its action runs. A batch
can be dispatched with `protec_many`, either all-or-nothing or tolerating
per-guard failures.
"""

from typing import List, Sequence, Union

from loguru import logger

from ..base.chain import Chain
from ..base.contract import Contract, nonreentrant, transactional
from ..base.core import Core, CoreRef
from ..types import NoActionNeeded, NotAGuard
from .guards import Guard
from .registry import GuardRegistry

GuardRef = Union[str, Contract]


def _guard_address(guard: GuardRef) -> str:
    return guard.address if isinstance(guard, Contract) else guard


class PCVSentinel(CoreRef):
    """
    Usage:
        sentinel = PCVSentinel(chain, core)
        core.grant_guardian(sentinel.address, sender=governor)
        sentinel.knight(guard.address, sender=guardian)

        sentinel.protec(guard.address, sender=keeper)
        sentinel.protec_many(True, [g1, g2, g3], sender=keeper)
    """

    def __init__(self, chain: Chain, core: Core, label: str = "pcv-sentinel"):
        super().__init__(chain, core, label)
        self._registry = GuardRegistry()

    # ---------- Registry ----------

    def is_guard(self, guard: GuardRef) -> bool:
        return self._registry.contains(_guard_address(guard))

    def all_guards(self) -> List[str]:
        return self._registry.all()

    @transactional
    def knight(self, guard: GuardRef, *, sender: str) -> None:
        self._only_governor_or_guardian_or_admin(sender)
        address = _guard_address(guard)
        if self._registry.add(address):
            self.emit("GuardAdded", guard=address)
            logger.info(f"Knighted guard {address}")

    @transactional
    def slay(self, guard: GuardRef, *, sender: str) -> None:
        self._only_governor_or_guardian_or_admin(sender)
        address = _guard_address(guard)
        if self._registry.remove(address):
            self.emit("GuardRemoved", guard=address)
            logger.info(f"Slayed guard {address}")

    # ---------- Dispatch ----------

    def _protec(self, address: str) -> None:
        if not self._registry.contains(address):
            raise NotAGuard("Provided address is not a guard")
        guard = self.chain.contract_at(address)
        if not isinstance(guard, Guard):
            raise NotAGuard("Provided address is not a guard")
        if not guard.check():
            raise NoActionNeeded("No need to protec.")
        guard.action()
        self.emit("Protected", guard=address)
        logger.debug(f"Protected with guard {address}")

    @transactional
    @nonreentrant
    def protec(self, guard: GuardRef, *, sender: str) -> None:
        """Run one registered guard whose check passes."""
        self._protec(_guard_address(guard))

    @transactional
    @nonreentrant
    def protec_many(self, allow_failures: bool, guards: Sequence[GuardRef], *, sender: str) -> None:
        """
        Dispatch `guards` in order.

        Each guard runs in its own nested transaction. With `allow_failures`
        a failing guard, whatever it raises, is rolled back, reported with a
        ProtecFailure event and skipped; otherwise the first failure reverts
        the whole batch.
        """
        for guard in guards:
            address = _guard_address(guard)
            if not allow_failures:
                with self.chain.transaction():
                    self._protec(address)
                continue
            try:
                with self.chain.transaction():
                    self._protec(address)
            except Exception as e:
                self.emit("ProtecFailure", guard=address)
                logger.opt(exception=e).warning(f"Guard {address} failed: {e}")
