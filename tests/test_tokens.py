"""Tests for the token collaborators."""

import pytest

from fei_pcv.tokens.erc20 import MockToken, StableToken, WETH
from fei_pcv.types import (
    InsufficientAllowance,
    InsufficientBalance,
    InsufficientFunds,
    MAX_UINT256,
    Unauthorized,
)


class TestERC20:
    @pytest.fixture
    def token(self, chain, user: str) -> MockToken:
        token = MockToken(chain, "Token", "TKN")
        token.mint(user, 1_000)
        return token

    def test_transfer(self, token: MockToken, user: str, user2: str):
        token.transfer(user2, 400, sender=user)
        assert token.balance_of(user) == 600
        assert token.balance_of(user2) == 400
        assert token.total_supply == 1_000

    def test_transfer_exceeds_balance(self, token: MockToken, user: str, user2: str):
        with pytest.raises(InsufficientBalance, match="ERC20: transfer amount exceeds balance"):
            token.transfer(user, 1, sender=user2)

    def test_transfer_from_spends_allowance(self, token: MockToken, user: str, user2: str):
        token.approve(user2, 300, sender=user)
        token.transfer_from(user, user2, 200, sender=user2)
        assert token.allowance(user, user2) == 100
        assert token.balance_of(user2) == 200

    def test_transfer_from_without_allowance(self, token: MockToken, user: str, user2: str):
        with pytest.raises(InsufficientAllowance, match="ERC20: transfer amount exceeds allowance"):
            token.transfer_from(user, user2, 1, sender=user2)
        assert token.balance_of(user) == 1_000

    def test_balance_checked_before_allowance(self, token: MockToken, user2: str, user: str):
        # user2 holds nothing and approved nothing: the balance error wins
        with pytest.raises(InsufficientBalance):
            token.transfer_from(user2, user, 1, sender=user)

    def test_infinite_allowance_is_not_spent(self, token: MockToken, user: str, user2: str):
        token.approve(user2, MAX_UINT256, sender=user)
        token.transfer_from(user, user2, 500, sender=user2)
        assert token.allowance(user, user2) == MAX_UINT256

    def test_insufficient_errors_share_a_base(self):
        assert issubclass(InsufficientBalance, InsufficientFunds)
        assert issubclass(InsufficientAllowance, InsufficientFunds)


class TestStableToken:
    def test_only_minters_mint(self, fei: StableToken, minter: str, user: str):
        fei.mint(user, 50, sender=minter)
        assert fei.balance_of(user) == 50
        with pytest.raises(Unauthorized, match="CoreRef: Caller is not a minter"):
            fei.mint(user, 50, sender=user)

    def test_holder_burns_own_balance(self, fei: StableToken, minter: str, user: str):
        fei.mint(user, 50, sender=minter)
        fei.burn(20, sender=user)
        assert fei.balance_of(user) == 30
        assert fei.total_supply == 30

    def test_burn_from_requires_burner(self, fei: StableToken, minter: str, user: str, user2: str):
        fei.mint(user, 50, sender=minter)
        with pytest.raises(Unauthorized, match="CoreRef: Caller is not a burner"):
            fei.burn_from(user, 10, sender=user2)


class TestWETH:
    def test_wrap_and_unwrap(self, chain, user: str):
        weth = WETH(chain)
        chain.set_eth_balance(user, 10**18)

        weth.deposit(4 * 10**17, sender=user)
        assert weth.balance_of(user) == 4 * 10**17
        assert chain.eth_balance(user) == 6 * 10**17

        weth.withdraw(10**17, sender=user)
        assert weth.balance_of(user) == 3 * 10**17
        assert chain.eth_balance(user) == 7 * 10**17

    def test_wrap_more_than_held(self, chain, user: str):
        weth = WETH(chain)
        with pytest.raises(InsufficientBalance):
            weth.deposit(1, sender=user)
        assert weth.total_supply == 0
