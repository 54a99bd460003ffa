"""Tests for the single-token PCV deposit and reserve manager."""

import pytest

from fei_pcv.stabilizer.pcv_deposit import PCVDeposit
from fei_pcv.stabilizer.reserves import ReserveManager
from fei_pcv.types import InsufficientBalance, InvalidParameter, Unauthorized


class TestPCVDeposit:
    def test_balance(self, asset, pcv_deposit: PCVDeposit):
        asset.mint(pcv_deposit.address, 42)
        assert pcv_deposit.balance() == 42
        assert pcv_deposit.balance_reported_in() == asset.address

    def test_deposit_keeps_funds(self, chain, asset, pcv_deposit: PCVDeposit):
        asset.mint(pcv_deposit.address, 42)
        with chain.record() as logs:
            pcv_deposit.deposit()
        assert pcv_deposit.balance() == 42
        assert logs[0].name == "Deposit"

    def test_withdraw(self, asset, pcv_deposit: PCVDeposit, pcv_controller, user):
        asset.mint(pcv_deposit.address, 100)
        pcv_deposit.withdraw(user, 60, sender=pcv_controller)
        assert asset.balance_of(user) == 60

    def test_withdraw_requires_pcv_controller(self, pcv_deposit: PCVDeposit, governor, user):
        with pytest.raises(Unauthorized, match="CoreRef: Caller is not a PCV controller"):
            pcv_deposit.withdraw(user, 1, sender=governor)

    def test_withdraw_more_than_held(self, pcv_deposit: PCVDeposit, pcv_controller, user):
        with pytest.raises(InsufficientBalance):
            pcv_deposit.withdraw(user, 1, sender=pcv_controller)

    def test_withdraw_other_token(self, chain, fei, minter, pcv_deposit: PCVDeposit, pcv_controller, user):
        fei.mint(pcv_deposit.address, 5, sender=minter)
        pcv_deposit.withdraw_erc20(fei, user, 5, sender=pcv_controller)
        assert fei.balance_of(user) == 5


class TestReserveManager:
    @pytest.fixture
    def holder(self, chain) -> str:
        return chain.new_address("holder")

    @pytest.fixture
    def reserves(self, asset, holder, pcv_deposit) -> ReserveManager:
        return ReserveManager(asset, holder, 100, pcv_deposit)

    def test_surplus(self, asset, holder, reserves: ReserveManager):
        asset.mint(holder, 150)
        assert reserves.reserve_balance() == 150
        assert reserves.surplus() == 50
        assert reserves.has_surplus()

    def test_allocate(self, asset, holder, pcv_deposit, reserves: ReserveManager):
        asset.mint(holder, 150)
        assert reserves.allocate_surplus() == 50
        assert pcv_deposit.balance() == 50
        assert reserves.allocate_surplus() == 0

    def test_threshold_must_be_positive(self, asset, holder, pcv_deposit, reserves: ReserveManager):
        with pytest.raises(InvalidParameter):
            ReserveManager(asset, holder, 0, pcv_deposit)
        with pytest.raises(InvalidParameter):
            reserves.set_reserves_threshold(0)
        assert reserves.reserves_threshold == 100
