"""
Error taxonomy shared by every contract.

Every error aborts the call that raised it; the chain restores all state
touched by that call before the exception reaches the caller.
"""


class ContractError(Exception):
    """Base class for reverts raised by contract calls."""


# Authorization

class AuthorizationError(ContractError):
    """Caller lacks the capability required by the call."""


class Unauthorized(AuthorizationError):
    """Role-gated call made by a non-member."""

    def __init__(self, account: str, role: str):
        super().__init__(f"{account} is missing role {role}")
        self.account = account
        self.role = role


# Validation

class InvalidInputError(ContractError):
    """Call arguments or attached value are malformed."""


class LengthMismatch(InvalidInputError):
    """Parallel input sequences differ in length."""


class InvalidPayment(InvalidInputError):
    """Attached value is zero or below the asking price."""


class InvalidAmount(InvalidInputError):
    """Amount is negative or otherwise unusable."""


# State preconditions

class PreconditionError(ContractError):
    """Current state does not allow the call."""


class NotOwner(PreconditionError):
    """Caller does not own the asset."""


class NotApproved(PreconditionError):
    """Contract has no transfer rights over the asset."""


class NotEnoughCollateral(PreconditionError):
    """Attached value is below the required collateral."""


class InsufficientFunds(PreconditionError):
    """Account balance cannot cover the amount."""


class NotEnoughSources(PreconditionError):
    """Oracle has fewer trusted sources than required."""


class NonexistentAsset(PreconditionError):
    """Asset id was never minted or has been burned."""


class ReentrantCall(PreconditionError):
    """Guarded entry point re-entered while already running."""


class EmptyReserve(PreconditionError):
    """Reserve holds no asset, so no price can be implied."""


# Collaborator failures

class CollaboratorError(ContractError):
    """An external collaborator failed or rejected the interaction."""


class TransferFailed(CollaboratorError):
    """Value or token transfer returned failure or reverted."""
