"""
Matrix Shared - Common types, chain primitives and utilities.
"""

from .chain import Chain, ChainSnapshot, Contract, non_reentrant, transaction
from .config import MatrixConfig, get_config
from .errors import (
    AuthorizationError,
    CollaboratorError,
    ContractError,
    EmptyReserve,
    InsufficientFunds,
    InvalidAmount,
    InvalidInputError,
    InvalidPayment,
    LengthMismatch,
    NonexistentAsset,
    NotApproved,
    NotEnoughCollateral,
    NotEnoughSources,
    NotOwner,
    PreconditionError,
    ReentrantCall,
    TransferFailed,
    Unauthorized,
)
from .ledger import FungibleLedger
from .logger import AgentLogger, get_logger
from .types import (
    Address,
    Borrowed,
    Bought,
    Event,
    InitState,
    PriceUpdated,
    Role,
    RoleGranted,
    RoleRevoked,
    RoleId,
    ScopedRole,
    Sold,
)

__all__ = [
    # Types
    "Address",
    "Role",
    "InitState",
    "Event",
    "RoleGranted",
    "RoleRevoked",
    "ScopedRole",
    "RoleId",
    "PriceUpdated",
    "Bought",
    "Sold",
    "Borrowed",
    # Chain
    "Chain",
    "ChainSnapshot",
    "Contract",
    "transaction",
    "non_reentrant",
    "FungibleLedger",
    # Errors
    "ContractError",
    "AuthorizationError",
    "InvalidInputError",
    "PreconditionError",
    "CollaboratorError",
    "Unauthorized",
    "LengthMismatch",
    "InvalidPayment",
    "InvalidAmount",
    "NotOwner",
    "NotApproved",
    "NotEnoughCollateral",
    "InsufficientFunds",
    "NotEnoughSources",
    "NonexistentAsset",
    "ReentrantCall",
    "EmptyReserve",
    "TransferFailed",
    # Config
    "get_config",
    "MatrixConfig",
    # Logger
    "get_logger",
    "AgentLogger",
]
