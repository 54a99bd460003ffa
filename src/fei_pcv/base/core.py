"""
Core permissions registry and the CoreRef base for protocol contracts.

Access checks are explicit: privileged entry points call `require_role`
with the roles they accept, resolved against the shared Core registry.
"""

from typing import Dict, Iterable, Set

from loguru import logger

from ..types import Role, Unauthorized
from .chain import Chain
from .contract import Contract, transactional


class Core(Contract):
    """
    Shared access-control registry.

    Maps each Role to the set of accounts holding it. The deployer is the
    first governor; governors grant and revoke every role.
    """

    def __init__(self, chain: Chain, governor: str, label: str = "core"):
        super().__init__(chain, label)
        self._members: Dict[Role, Set[str]] = {role: set() for role in Role}
        self._members[Role.GOVERN].add(governor)
        logger.info(f"Core deployed with governor {governor}")

    def has_role(self, role: Role, account: str) -> bool:
        return account in self._members[Role(role)]

    def members(self, role: Role) -> Set[str]:
        return set(self._members[Role(role)])

    @transactional
    def grant_role(self, role: Role, account: str, *, sender: str) -> None:
        require_role(self, sender, (Role.GOVERN,), "Permissions: Caller is not a governor")
        role = Role(role)
        if account in self._members[role]:
            return
        self._members[role].add(account)
        self.emit("RoleGranted", role=role.role_id, account=account, sender=sender)
        logger.info(f"Granted {role.value} to {account}")

    @transactional
    def revoke_role(self, role: Role, account: str, *, sender: str) -> None:
        require_role(self, sender, (Role.GOVERN,), "Permissions: Caller is not a governor")
        role = Role(role)
        if account not in self._members[role]:
            return
        self._members[role].discard(account)
        self.emit("RoleRevoked", role=role.role_id, account=account, sender=sender)
        logger.info(f"Revoked {role.value} from {account}")

    @transactional
    def renounce_role(self, role: Role, *, sender: str) -> None:
        role = Role(role)
        if sender in self._members[role]:
            self._members[role].discard(sender)
            self.emit("RoleRevoked", role=role.role_id, account=sender, sender=sender)

    def grant_governor(self, account: str, *, sender: str) -> None:
        self.grant_role(Role.GOVERN, account, sender=sender)

    def grant_guardian(self, account: str, *, sender: str) -> None:
        self.grant_role(Role.GUARDIAN, account, sender=sender)

    def grant_minter(self, account: str, *, sender: str) -> None:
        self.grant_role(Role.MINTER, account, sender=sender)

    def grant_burner(self, account: str, *, sender: str) -> None:
        self.grant_role(Role.BURNER, account, sender=sender)

    def grant_pcv_controller(self, account: str, *, sender: str) -> None:
        self.grant_role(Role.PCV_CONTROLLER, account, sender=sender)


def has_role(core: Core, account: str, role: Role) -> bool:
    """Whether `account` holds `role` in the registry."""
    return core.has_role(role, account)


def require_role(core: Core, account: str, roles: Iterable[Role], message: str) -> None:
    """Raise Unauthorized unless `account` holds at least one of `roles`."""
    if not any(has_role(core, account, role) for role in roles):
        raise Unauthorized(message)


class CoreRef(Contract):
    """
    Contract bound to a Core registry.

    Carries the contract-admin role (governance may point it at a narrower
    role such as PSM_ADMIN) and the global pause switch every protocol
    contract exposes to guardians.
    """

    def __init__(self, chain: Chain, core: Core, label: str):
        super().__init__(chain, label)
        self.core = core
        self.contract_admin_role: Role = Role.GOVERN
        self.paused = False

    # ---------- Role checks ----------

    def _only_governor(self, sender: str) -> None:
        require_role(self.core, sender, (Role.GOVERN,), "CoreRef: Caller is not a governor")

    def _only_governor_or_admin(self, sender: str) -> None:
        require_role(
            self.core,
            sender,
            (Role.GOVERN, self.contract_admin_role),
            "CoreRef: Caller is not a governor or contract admin",
        )

    def _only_guardian_or_governor(self, sender: str) -> None:
        require_role(
            self.core,
            sender,
            (Role.GUARDIAN, Role.GOVERN),
            "CoreRef: Caller is not a guardian or governor",
        )

    def _only_governor_or_guardian_or_admin(self, sender: str) -> None:
        require_role(
            self.core,
            sender,
            (Role.GOVERN, Role.GUARDIAN, self.contract_admin_role),
            "CoreRef: Caller is not governor or guardian or admin",
        )

    def _only_pcv_controller(self, sender: str) -> None:
        require_role(self.core, sender, (Role.PCV_CONTROLLER,), "CoreRef: Caller is not a PCV controller")

    # ---------- Admin ----------

    @transactional
    def set_contract_admin_role(self, role: Role, *, sender: str) -> None:
        self._only_governor(sender)
        old = self.contract_admin_role
        self.contract_admin_role = Role(role)
        self.emit("ContractAdminRoleUpdate", old_role=old.role_id, new_role=self.contract_admin_role.role_id)

    # ---------- Pausable ----------

    @transactional
    def pause(self, *, sender: str) -> None:
        self._only_guardian_or_governor(sender)
        self.paused = True
        self.emit("Paused", account=sender)
        logger.info(f"{self.label} paused by {sender}")

    @transactional
    def unpause(self, *, sender: str) -> None:
        self._only_guardian_or_governor(sender)
        self.paused = False
        self.emit("Unpaused", account=sender)
        logger.info(f"{self.label} unpaused by {sender}")
