"""Tests for declarative role configuration."""

import pytest
from pydantic import ValidationError

from fei_pcv.governance.permissions import PermissionsConfig, apply_permissions, validate_permissions
from fei_pcv.types import InvalidParameter, Role, Unauthorized


@pytest.fixture
def addresses(chain, psm, sentinel, governor, guardian):
    return {
        "feiDAOTimelock": governor,
        "guardianMultisig": guardian,
        "daiFixedPricePSM": psm.address,
        "pcvSentinel": sentinel.address,
        "daiPCVDripController": chain.new_address("drip-controller"),
    }


class TestPermissionsConfig:
    def test_keys_are_role_names(self):
        config = PermissionsConfig(roles={"MINTER_ROLE": ["daiFixedPricePSM"], "GUARDIAN_ROLE": []})
        assert config.roles[Role.MINTER] == ["daiFixedPricePSM"]

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            PermissionsConfig(roles={"ORACLE_ADMIN_ROLE": []})

    def test_duplicates_rejected(self):
        with pytest.raises(ValidationError):
            PermissionsConfig(roles={"MINTER_ROLE": ["a", "a"]})

    def test_unknown_name(self):
        config = PermissionsConfig(roles={"MINTER_ROLE": ["nobody"]})
        with pytest.raises(InvalidParameter, match="Unknown address name: nobody"):
            config.grants({})


class TestApplyPermissions:
    def test_default_layout_is_in_sync_after_apply(self, core, governor, addresses):
        config = PermissionsConfig.default()
        missing = validate_permissions(core, config, addresses)
        assert (Role.PCV_CONTROLLER, "daiPCVDripController", addresses["daiPCVDripController"]) in missing

        granted = apply_permissions(core, config, addresses, sender=governor)

        assert set(granted) == set(missing)
        assert validate_permissions(core, config, addresses) == []
        assert core.has_role(Role.PCV_CONTROLLER, addresses["daiPCVDripController"])

    def test_apply_is_idempotent(self, core, governor, addresses):
        config = PermissionsConfig.default()
        apply_permissions(core, config, addresses, sender=governor)
        assert apply_permissions(core, config, addresses, sender=governor) == []

    def test_apply_requires_governor(self, core, guardian, addresses):
        with pytest.raises(Unauthorized):
            apply_permissions(core, PermissionsConfig.default(), addresses, sender=guardian)
