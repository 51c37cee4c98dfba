"""
Fungible token ledger.

Transfers report failure through their return value instead of raising, so
callers must check the result.
"""

from .chain import Chain, Contract, transaction
from .errors import InvalidAmount, Unauthorized
from .types import Address, Role


class FungibleLedger(Contract):
    """Minimal ERC20-style balance ledger with allowances."""

    storage_fields = ("balances", "allowances", "total_supply")
    agent_name = "LEDGER"

    def __init__(
        self,
        chain: Chain,
        owner: Address,
        symbol: str = "DVT",
        decimals: int = 18,
    ):
        super().__init__(chain)
        self.owner = owner
        self.symbol = symbol
        self.decimals = decimals
        self.balances: dict[Address, int] = {}
        self.allowances: dict[tuple[Address, Address], int] = {}
        self.total_supply = 0

        self.logger.info("Ledger deployed", symbol=symbol, owner=owner)

    def balance_of(self, account: Address) -> int:
        return self.balances.get(account, 0)

    def allowance(self, owner: Address, spender: Address) -> int:
        return self.allowances.get((owner, spender), 0)

    @transaction
    def mint(self, to: Address, amount: int, *, sender: Address) -> None:
        """Create new tokens. Owner only."""
        if sender != self.owner:
            raise Unauthorized(sender, Role.ADMIN.value)
        if amount < 0:
            raise InvalidAmount(f"cannot mint {amount}")
        self.balances[to] = self.balance_of(to) + amount
        self.total_supply += amount

    @transaction
    def approve(self, spender: Address, amount: int, *, sender: Address) -> bool:
        if amount < 0:
            raise InvalidAmount(f"cannot approve {amount}")
        self.allowances[(sender, spender)] = amount
        return True

    @transaction
    def transfer(self, to: Address, amount: int, *, sender: Address) -> bool:
        """Move tokens from the caller. Returns False on insufficient balance."""
        if amount < 0:
            raise InvalidAmount(f"cannot transfer {amount}")
        if self.balance_of(sender) < amount:
            self.logger.debug("Transfer refused", sender=sender, amount=amount)
            return False
        self._move(sender, to, amount)
        return True

    @transaction
    def transfer_from(
        self,
        owner: Address,
        to: Address,
        amount: int,
        *,
        sender: Address,
    ) -> bool:
        """Spend an allowance. Returns False on insufficient balance or allowance."""
        if amount < 0:
            raise InvalidAmount(f"cannot transfer {amount}")
        allowed = self.allowance(owner, sender)
        if allowed < amount or self.balance_of(owner) < amount:
            return False
        self.allowances[(owner, sender)] = allowed - amount
        self._move(owner, to, amount)
        return True

    def _move(self, source: Address, to: Address, amount: int) -> None:
        self.balances[source] = self.balance_of(source) - amount
        self.balances[to] = self.balance_of(to) + amount
