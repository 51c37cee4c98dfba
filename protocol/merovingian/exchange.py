"""
MEROVINGIAN - Marketplace

Buys and sells collectibles strictly at the oracle's consensus price.
The price is read once per call, all bookkeeping completes before any
payout, and both entry points hold the reentrancy guard for the whole call.
"""

from oracle import PriceOracle
from shared import (
    Address,
    Bought,
    Chain,
    Contract,
    InsufficientFunds,
    InvalidPayment,
    NotApproved,
    NotOwner,
    Sold,
    get_config,
    non_reentrant,
    transaction,
)

from .collectibles import AssetRegistry


class Marketplace(Contract):
    """
    Oracle-priced exchange for collectibles it mints and burns itself.

    Buyers pay at least the consensus price and get the excess back.
    Sellers must approve the marketplace first and are paid from its
    native balance.
    """

    storage_fields = ("assets_bought", "assets_sold")
    agent_name = "MEROVINGIAN-EXCHANGE"

    def __init__(
        self,
        chain: Chain,
        oracle: PriceOracle,
        *,
        deployer: Address,
        value: int = 0,
        asset_name: str | None = None,
        asset_symbol: str | None = None,
    ):
        with chain.atomic():
            super().__init__(chain)
            config = get_config().market
            self.oracle = oracle

            # Statistics
            self.assets_bought = 0
            self.assets_sold = 0

            self.assets = AssetRegistry(
                chain,
                minter=self.address,
                name=asset_name or config.asset_name,
                symbol=asset_symbol or config.asset_symbol,
            )
            self._collect(deployer, value)

        self.logger.info(
            "Marketplace initialized",
            symbol=self.assets.symbol,
            oracle=oracle.address,
            funding=value,
        )

    @property
    def symbol(self) -> str:
        return self.assets.symbol

    def current_price(self) -> int:
        """Consensus price the next trade would execute at."""
        return self.oracle.consensus_price(self.symbol)

    @transaction
    @non_reentrant
    def buy(self, *, sender: Address, value: int) -> int:
        """Mint one asset to the caller at the consensus price."""
        if value <= 0:
            raise InvalidPayment("no payment attached")
        self._collect(sender, value)

        price = self.current_price()
        if value < price:
            raise InvalidPayment(f"paid {value}, price is {price}")

        asset_id = self.assets.mint(sender, sender=self.address)
        self.assets_bought += 1
        self.emit(Bought(buyer=sender, asset_id=asset_id, price=price))

        change = value - price
        if change:
            self.chain.send(self.address, sender, change)

        return asset_id

    @transaction
    @non_reentrant
    def sell(self, asset_id: int, *, sender: Address) -> int:
        """Burn one of the caller's assets and pay the consensus price."""
        if self.assets.owner_of(asset_id) != sender:
            raise NotOwner(f"{sender} does not own asset {asset_id}")
        if self.assets.approved_for(asset_id) != self.address:
            raise NotApproved(f"marketplace not approved for asset {asset_id}")

        price = self.current_price()
        if self.balance < price:
            raise InsufficientFunds(f"holds {self.balance}, owes {price}")

        self.assets.transfer(asset_id, sender, self.address, sender=self.address)
        self.assets.burn(asset_id, sender=self.address)
        self.assets_sold += 1
        self.emit(Sold(seller=sender, asset_id=asset_id, price=price))

        self.chain.send(self.address, sender, price)

        return price

    def get_stats(self) -> dict:
        """Get marketplace statistics."""
        return {
            "assets_bought": self.assets_bought,
            "assets_sold": self.assets_sold,
            "assets_outstanding": self.assets.total_supply,
            "balance": self.balance,
        }
