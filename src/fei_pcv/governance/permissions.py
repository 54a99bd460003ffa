"""Declarative role assignments for a deployment."""

from typing import Dict, List, Tuple

from loguru import logger
from pydantic import BaseModel, Field, validator

from ..base.core import Core
from ..types import InvalidParameter, Role
from .proposal import AddressTable

Grant = Tuple[Role, str, str]


class PermissionsConfig(BaseModel):
    """
    Which named contracts should hold each role.

    Keys are role names as stored in Core (`MINTER_ROLE`, ...); values are
    names from the deployment address table.
    """

    roles: Dict[Role, List[str]] = Field(default_factory=dict)

    class Config:
        """Pydantic configuration."""
        validate_assignment = True

    @validator("roles")
    def no_duplicates(cls, v):
        for role, names in v.items():
            if len(set(names)) != len(names):
                raise ValueError(f"Duplicate contract listed for {role.value}")
        return v

    @classmethod
    def default(cls) -> "PermissionsConfig":
        """Role layout of a PSM deployment guarded by a sentinel."""
        return cls(roles={
            Role.GOVERN: ["feiDAOTimelock"],
            Role.MINTER: ["feiDAOTimelock", "daiFixedPricePSM"],
            Role.BURNER: [],
            Role.PCV_CONTROLLER: ["feiDAOTimelock", "daiPCVDripController"],
            Role.GUARDIAN: ["guardianMultisig", "pcvSentinel"],
            Role.PSM_ADMIN: [],
        })

    def grants(self, addresses: AddressTable) -> List[Grant]:
        """Flatten to (role, name, address), resolving names."""
        result = []
        for role, names in self.roles.items():
            for name in names:
                if name not in addresses:
                    raise InvalidParameter(f"Unknown address name: {name}")
                result.append((role, name, addresses[name]))
        return result


def apply_permissions(core: Core, config: PermissionsConfig, addresses: AddressTable, *, sender: str) -> List[Grant]:
    """Grant every configured role that is not already held. Returns the new grants."""
    granted = []
    for role, name, address in config.grants(addresses):
        if core.has_role(role, address):
            continue
        core.grant_role(role, address, sender=sender)
        granted.append((role, name, address))
    logger.info(f"Applied {len(granted)} role grants")
    return granted


def validate_permissions(core: Core, config: PermissionsConfig, addresses: AddressTable) -> List[Grant]:
    """Configured grants that are missing on-chain; empty when in sync."""
    missing = [
        (role, name, address)
        for role, name, address in config.grants(addresses)
        if not core.has_role(role, address)
    ]
    for role, name, _ in missing:
        logger.warning(f"{name} is missing {role.value}")
    return missing
