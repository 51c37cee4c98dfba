"""
Shared types for Matrix protocol components.
"""

from dataclasses import dataclass
from enum import Enum

Address = str


class Role(str, Enum):
    """Capability identifiers held in an access registry."""
    ADMIN = "admin"
    TRUSTED_SOURCE = "trusted_source"
    INITIALIZER = "initializer"


@dataclass(frozen=True)
class ScopedRole:
    """A role whose capability only applies to one contract."""
    role: Role
    scope: Address

    @property
    def value(self) -> str:
        return f"{self.role.value}@{self.scope}"


RoleId = Role | ScopedRole


class InitState(str, Enum):
    """One-shot initialization states. Only UNINITIALIZED -> INITIALIZED."""
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"


@dataclass(frozen=True)
class Event:
    """Base class for observable contract events."""

    @property
    def name(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class RoleGranted(Event):
    """Account added to a role."""
    role: RoleId
    account: Address
    sender: Address


@dataclass(frozen=True)
class RoleRevoked(Event):
    """Account removed from a role."""
    role: RoleId
    account: Address
    sender: Address


@dataclass(frozen=True)
class PriceUpdated(Event):
    """Source overwrote its price for a symbol."""
    source: Address
    symbol: str
    old_price: int
    new_price: int


@dataclass(frozen=True)
class Bought(Event):
    """Asset minted to a buyer at the oracle price."""
    buyer: Address
    asset_id: int
    price: int  # Wei


@dataclass(frozen=True)
class Sold(Event):
    """Asset burned and paid out at the oracle price."""
    seller: Address
    asset_id: int
    price: int  # Wei


@dataclass(frozen=True)
class Borrowed(Event):
    """Collateralized draw from the lending pool."""
    account: Address
    recipient: Address
    deposit_required: int  # Wei
    amount: int  # Token base units
