"""
In-process ledger for simulating PCV contracts.

The Chain plays the part of the host ledger: it owns the block clock, the
event log, native ETH balances and the table of deployed contracts. Its
`transaction()` context manager provides the all-or-nothing semantics a real
transaction gets for free: every registered contract's state is snapshotted
on entry and restored if the block raises.
"""

import copy
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, TYPE_CHECKING

from eth_account import Account
from eth_utils import keccak, to_checksum_address
from loguru import logger

from ..types import ContractNotFound, InsufficientBalance, InvalidParameter

if TYPE_CHECKING:
    from .contract import Contract


@dataclass(frozen=True)
class Event:
    """A log entry emitted by a contract."""
    name: str
    address: str
    args: Dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.args[key]


@dataclass
class _Snapshot:
    contracts: Dict[str, "Contract"]
    states: Dict[str, Dict[str, Any]]
    eth_balances: Dict[str, int]
    event_count: int


class Chain:
    """
    Simulated ledger shared by every contract in a scenario.

    Usage:
        chain = Chain()
        user = chain.new_address("user")
        chain.set_eth_balance(user, 10**18)

        with chain.transaction():
            ...  # rolled back as a whole if anything raises

        with chain.record() as logs:
            psm.deposit(sender=user)
        assert logs == []
    """

    def __init__(self, timestamp: Optional[int] = None):
        self.timestamp: int = int(time.time()) if timestamp is None else timestamp
        self.events: List[Event] = []
        self._eth_balances: Dict[str, int] = {}
        self._contracts: Dict[str, "Contract"] = {}
        self._nonce = 0

    # ---------- Accounts & contracts ----------

    def new_address(self, label: str) -> str:
        """Deterministic externally-owned account address for a label."""
        account = Account.from_key(keccak(text=f"fei-pcv:{label}"))
        return account.address

    def register(self, contract: "Contract", label: str) -> str:
        """Assign an address to a newly deployed contract."""
        self._nonce += 1
        digest = keccak(text=f"{label}:{self._nonce}")
        address = to_checksum_address(digest[-20:])
        self._contracts[address] = contract
        logger.debug(f"Deployed {label} at {address}")
        return address

    def contract_at(self, address: str) -> "Contract":
        try:
            return self._contracts[to_checksum_address(address)]
        except (KeyError, ValueError):
            raise ContractNotFound(f"No contract deployed at {address}")

    def is_contract(self, address: str) -> bool:
        try:
            return to_checksum_address(address) in self._contracts
        except ValueError:
            return False

    # ---------- Clock ----------

    def advance_time(self, seconds: int) -> int:
        if seconds < 0:
            raise InvalidParameter("Chain: time cannot go backwards")
        self.timestamp += seconds
        return self.timestamp

    def set_timestamp(self, timestamp: int) -> int:
        if timestamp < self.timestamp:
            raise InvalidParameter("Chain: time cannot go backwards")
        self.timestamp = timestamp
        return self.timestamp

    # ---------- Native ETH ----------

    def eth_balance(self, address: str) -> int:
        return self._eth_balances.get(address, 0)

    def set_eth_balance(self, address: str, amount: int) -> None:
        """Force an ETH balance, as fork tests do with hardhat_setBalance."""
        self._eth_balances[address] = amount

    def transfer_eth(self, src: str, dst: str, amount: int) -> None:
        balance = self.eth_balance(src)
        if amount > balance:
            raise InsufficientBalance("Address: insufficient balance")
        self._eth_balances[src] = balance - amount
        self._eth_balances[dst] = self.eth_balance(dst) + amount

    # ---------- Events ----------

    def emit(self, emitter: "Contract", name: str, **args: Any) -> Event:
        event = Event(name=name, address=emitter.address, args=args)
        self.events.append(event)
        logger.debug(f"{emitter.label}.{name} {args}")
        return event

    def events_named(self, name: str) -> List[Event]:
        return [event for event in self.events if event.name == name]

    @contextmanager
    def record(self) -> Iterator[List[Event]]:
        """Collect the events emitted inside the block."""
        captured: List[Event] = []
        start = len(self.events)
        try:
            yield captured
        finally:
            captured.extend(self.events[start:])

    # ---------- Atomicity ----------

    def _snapshot(self) -> _Snapshot:
        # Contracts reference each other and the chain; map them to themselves
        # so only their own state is copied.
        memo: Dict[int, Any] = {id(self): self}
        for contract in self._contracts.values():
            memo[id(contract)] = contract
        states = {
            address: copy.deepcopy(contract.__dict__, memo)
            for address, contract in self._contracts.items()
        }
        return _Snapshot(
            contracts=dict(self._contracts),
            states=states,
            eth_balances=dict(self._eth_balances),
            event_count=len(self.events),
        )

    def _restore(self, snapshot: _Snapshot) -> None:
        self._contracts = snapshot.contracts
        for address, state in snapshot.states.items():
            contract = self._contracts[address]
            contract.__dict__.clear()
            contract.__dict__.update(state)
        self._eth_balances = snapshot.eth_balances
        del self.events[snapshot.event_count:]

    @contextmanager
    def transaction(self) -> Iterator["Chain"]:
        """
        Run the block atomically.

        Any exception restores all contract state, ETH balances and the event
        log to their values on entry, then propagates.
        """
        snapshot = self._snapshot()
        try:
            yield self
        except BaseException as e:
            self._restore(snapshot)
            logger.debug(f"Transaction reverted: {e}")
            raise
