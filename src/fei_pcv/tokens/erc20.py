"""
Fungible token collaborators.

ERC20Token implements the standard balance/allowance ledger. MockToken adds
an open faucet for scenarios, StableToken (FEI) gates minting behind the
MINTER role, and WETH wraps the chain's native balance.
"""

from typing import Dict

from loguru import logger

from ..base.chain import Chain
from ..base.contract import Contract, transactional
from ..base.core import Core, require_role
from ..types import (
    InsufficientAllowance,
    InsufficientBalance,
    InvalidParameter,
    MAX_UINT256,
    Role,
)


class ERC20Token(Contract):
    """Standard fungible token ledger."""

    def __init__(self, chain: Chain, name: str, symbol: str, decimals: int = 18):
        super().__init__(chain, symbol.lower())
        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self.total_supply = 0
        self._balances: Dict[str, int] = {}
        self._allowances: Dict[str, Dict[str, int]] = {}

    # ---------- Views ----------

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get(owner, {}).get(spender, 0)

    # ---------- Mutations ----------

    @transactional
    def approve(self, spender: str, amount: int, *, sender: str) -> bool:
        if amount < 0:
            raise InvalidParameter("ERC20: negative approval")
        self._allowances.setdefault(sender, {})[spender] = amount
        self.emit("Approval", owner=sender, spender=spender, value=amount)
        return True

    @transactional
    def transfer(self, to: str, amount: int, *, sender: str) -> bool:
        self._transfer(sender, to, amount)
        return True

    @transactional
    def transfer_from(self, owner: str, to: str, amount: int, *, sender: str) -> bool:
        # Balance is checked before allowance, matching OpenZeppelin's ordering.
        self._transfer(owner, to, amount)
        current = self.allowance(owner, sender)
        if current != MAX_UINT256:
            if amount > current:
                raise InsufficientAllowance("ERC20: transfer amount exceeds allowance")
            self._allowances.setdefault(owner, {})[sender] = current - amount
        return True

    # ---------- Internals ----------

    def _transfer(self, src: str, dst: str, amount: int) -> None:
        if amount < 0:
            raise InvalidParameter("ERC20: negative amount")
        balance = self.balance_of(src)
        if amount > balance:
            raise InsufficientBalance("ERC20: transfer amount exceeds balance")
        self._balances[src] = balance - amount
        self._balances[dst] = self.balance_of(dst) + amount
        self.emit("Transfer", src=src, dst=dst, value=amount)

    def _mint(self, to: str, amount: int) -> None:
        if amount < 0:
            raise InvalidParameter("ERC20: negative amount")
        self._balances[to] = self.balance_of(to) + amount
        self.total_supply += amount
        self.emit("Transfer", src=None, dst=to, value=amount)

    def _burn(self, account: str, amount: int) -> None:
        balance = self.balance_of(account)
        if amount > balance:
            raise InsufficientBalance("ERC20: burn amount exceeds balance")
        self._balances[account] = balance - amount
        self.total_supply -= amount
        self.emit("Transfer", src=account, dst=None, value=amount)


class MockToken(ERC20Token):
    """Token with an ungated faucet, for fork-style scenarios."""

    @transactional
    def mint(self, to: str, amount: int) -> None:
        self._mint(to, amount)


class StableToken(ERC20Token):
    """
    The protocol stablecoin.

    Only MINTER accounts may create supply. Holders can burn their own
    balance; BURNER accounts can burn anyone's.
    """

    def __init__(self, chain: Chain, core: Core, name: str = "Fei USD", symbol: str = "FEI"):
        super().__init__(chain, name, symbol, decimals=18)
        self.core = core

    @transactional
    def mint(self, to: str, amount: int, *, sender: str) -> None:
        require_role(self.core, sender, (Role.MINTER,), "CoreRef: Caller is not a minter")
        self._mint(to, amount)
        self.emit("Minting", to=to, minter=sender, amount=amount)

    @transactional
    def burn(self, amount: int, *, sender: str) -> None:
        self._burn(sender, amount)
        self.emit("Burning", to=sender, burner=sender, amount=amount)

    @transactional
    def burn_from(self, account: str, amount: int, *, sender: str) -> None:
        require_role(self.core, sender, (Role.BURNER,), "CoreRef: Caller is not a burner")
        self._burn(account, amount)
        self.emit("Burning", to=account, burner=sender, amount=amount)


class WETH(ERC20Token):
    """Wrapped native ETH."""

    def __init__(self, chain: Chain):
        super().__init__(chain, "Wrapped Ether", "WETH", decimals=18)

    @transactional
    def deposit(self, value: int, *, sender: str) -> None:
        self.chain.transfer_eth(sender, self.address, value)
        self._mint(sender, value)
        self.emit("Deposit", dst=sender, wad=value)

    @transactional
    def withdraw(self, amount: int, *, sender: str) -> None:
        self._burn(sender, amount)
        self.chain.transfer_eth(self.address, sender, amount)
        self.emit("Withdrawal", src=sender, wad=amount)
        logger.debug(f"Unwrapped {amount} wei for {sender}")
