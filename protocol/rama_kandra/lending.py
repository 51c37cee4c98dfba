"""
RAMA-KANDRA - Lending Pool

Lends ledger tokens against native-currency collateral. The collateral
price is implied from the liquidity reserve's balances at call time and is
never cached between calls, so whoever moves the reserve ratio moves the
collateral requirement.
"""

from shared import (
    Address,
    Borrowed,
    Chain,
    Contract,
    EmptyReserve,
    FungibleLedger,
    InvalidAmount,
    NotEnoughCollateral,
    TransferFailed,
    get_config,
    non_reentrant,
    transaction,
)

from .liquidity import ExternalReserve


class LendingPool(Contract):
    """
    Single-shot collateralized lending.

    required collateral = amount * implied price * collateral factor / scale
    """

    storage_fields = ("deposits",)
    agent_name = "RAMA-KANDRA-LENDING"

    def __init__(
        self,
        chain: Chain,
        token: FungibleLedger,
        reserve: ExternalReserve,
        collateral_factor: int | None = None,
        price_scale: int | None = None,
    ):
        super().__init__(chain)
        config = get_config().lending
        self.token = token
        self.reserve = reserve
        self.collateral_factor = (
            collateral_factor if collateral_factor is not None else config.collateral_factor
        )
        self.price_scale = price_scale if price_scale is not None else config.price_scale

        # Collateral posted per account
        self.deposits: dict[Address, int] = {}

        self.logger.info(
            "Lending pool initialized",
            token=token.symbol,
            reserve=reserve.address,
            collateral_factor=self.collateral_factor,
        )

    @property
    def available(self) -> int:
        """Tokens the pool can still lend."""
        return self.token.balance_of(self.address)

    def implied_price(self) -> int:
        """Live reserve ratio: native currency per whole token, scaled."""
        asset_balance = self.reserve.asset_balance
        if asset_balance == 0:
            raise EmptyReserve("reserve holds no tokens")
        return self.reserve.reference_balance * self.price_scale // asset_balance

    def required_collateral(self, amount: int) -> int:
        """Native collateral needed to borrow ``amount`` tokens right now."""
        if amount < 0:
            raise InvalidAmount(f"negative amount {amount}")
        return amount * self.implied_price() * self.collateral_factor // self.price_scale

    def deposit_of(self, account: Address) -> int:
        """Cumulative collateral posted by an account."""
        return self.deposits.get(account, 0)

    @transaction
    @non_reentrant
    def borrow(
        self,
        amount: int,
        recipient: Address,
        *,
        sender: Address,
        value: int,
    ) -> int:
        """Post collateral and send ``amount`` tokens to ``recipient``."""
        if amount <= 0:
            raise InvalidAmount(f"cannot borrow {amount}")
        self._collect(sender, value)

        deposit_required = self.required_collateral(amount)
        if value < deposit_required:
            raise NotEnoughCollateral(f"paid {value}, requires {deposit_required}")

        self.deposits[sender] = self.deposit_of(sender) + deposit_required
        self.emit(
            Borrowed(
                account=sender,
                recipient=recipient,
                deposit_required=deposit_required,
                amount=amount,
            )
        )

        excess = value - deposit_required
        if excess:
            self.chain.send(self.address, sender, excess)

        if not self.token.transfer(recipient, amount, sender=self.address):
            raise TransferFailed(f"pool holds {self.available}, cannot lend {amount}")

        return deposit_required

    def get_stats(self) -> dict:
        """Get pool statistics."""
        return {
            "borrowers": len(self.deposits),
            "total_deposits": sum(self.deposits.values()),
            "available": self.available,
            "collateral_factor": self.collateral_factor,
        }
