"""
SERAPH - Access Registry

Enumerable role table. Members are kept in insertion order so anything
iterating them (the oracle's median) is reproducible.
"""

from shared import (
    Address,
    Chain,
    Contract,
    Role,
    RoleGranted,
    RoleRevoked,
    RoleId,
    Unauthorized,
    transaction,
)


class AccessRegistry(Contract):
    """
    Assigns and revokes named roles.

    Holders of Role.ADMIN may grant and revoke any role; any account may
    renounce a role it holds. Contracts sharing one registry key their
    capabilities with ScopedRole so membership never carries across them.
    """

    storage_fields = ("roles",)
    agent_name = "SERAPH-REGISTRY"

    def __init__(self, chain: Chain, admin: Address):
        super().__init__(chain)
        self.roles: dict[RoleId, list[Address]] = {}
        self._add(Role.ADMIN, admin, sender=admin)

        self.logger.info("Access registry initialized", admin=admin)

    def has_role(self, role: RoleId, account: Address) -> bool:
        return account in self.roles.get(role, [])

    def members(self, role: RoleId) -> tuple[Address, ...]:
        """Role members in the order they were granted."""
        return tuple(self.roles.get(role, []))

    def member_count(self, role: RoleId) -> int:
        return len(self.roles.get(role, []))

    def check_role(self, role: RoleId, account: Address) -> None:
        """Raise Unauthorized unless account holds role."""
        if not self.has_role(role, account):
            raise Unauthorized(account, role.value)

    @transaction
    def grant(self, role: RoleId, account: Address, *, sender: Address) -> bool:
        """Add account to role. Returns False if it was already a member."""
        self.check_role(Role.ADMIN, sender)
        return self._add(role, account, sender=sender)

    @transaction
    def revoke(self, role: RoleId, account: Address, *, sender: Address) -> bool:
        """Remove account from role. Returns False if it was not a member."""
        self.check_role(Role.ADMIN, sender)
        return self._remove(role, account, sender=sender)

    @transaction
    def renounce(self, role: RoleId, account: Address, *, sender: Address) -> bool:
        """Drop a role the caller holds itself."""
        if sender != account:
            raise Unauthorized(sender, role.value)
        return self._remove(role, account, sender=sender)

    def _add(self, role: RoleId, account: Address, *, sender: Address) -> bool:
        members = self.roles.setdefault(role, [])
        if account in members:
            return False
        members.append(account)
        self.emit(RoleGranted(role=role, account=account, sender=sender))
        return True

    def _remove(self, role: RoleId, account: Address, *, sender: Address) -> bool:
        members = self.roles.get(role, [])
        if account not in members:
            return False
        members.remove(account)
        self.emit(RoleRevoked(role=role, account=account, sender=sender))
        return True
