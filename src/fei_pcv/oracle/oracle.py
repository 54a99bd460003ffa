"""Oracle collaborator interface and a settable mock oracle."""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from ..base.chain import Chain
from ..base.contract import Contract, transactional
from ..types import InvalidParameter, SCALE


@dataclass(frozen=True)
class OracleReading:
    """A fixed-point quote (base 1e18) and whether the source vouches for it."""
    price: int
    valid: bool = True


@runtime_checkable
class Oracle(Protocol):
    """Anything that can produce a reading."""

    address: str

    def read(self) -> OracleReading:
        ...


class MockOracle(Contract):
    """
    Oracle whose quote is set directly by the scenario.

    `MockOracle(chain, 1)` quotes exactly parity.
    """

    def __init__(self, chain: Chain, exchange_rate: int = 1, label: str = "mock-oracle"):
        super().__init__(chain, label)
        self._price = exchange_rate * SCALE
        self._valid = True

    def read(self) -> OracleReading:
        return OracleReading(price=self._price, valid=self._valid)

    @transactional
    def set_exchange_rate(self, rate: int) -> None:
        """Quote `rate` whole units."""
        self.set_exchange_rate_scaled_base(rate * SCALE)

    @transactional
    def set_exchange_rate_scaled_base(self, raw: int) -> None:
        """Quote a raw fixed-point value."""
        if raw < 0:
            raise InvalidParameter("MockOracle: negative price")
        self._price = raw
        self.emit("Update", price=raw)

    @transactional
    def set_valid(self, valid: bool) -> None:
        self._valid = valid
