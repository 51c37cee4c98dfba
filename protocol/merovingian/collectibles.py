"""
MEROVINGIAN - Collectible Asset Registry

Unique, mintable and burnable assets. Ids come from a counter and are
never reused, even after a burn.
"""

from shared import (
    Address,
    Chain,
    Contract,
    NonexistentAsset,
    NotApproved,
    NotOwner,
    Unauthorized,
    transaction,
)


class AssetRegistry(Contract):
    """ERC721-style registry whose minter holds exclusive mint/burn rights."""

    storage_fields = ("owners", "approvals", "next_id")
    agent_name = "MEROVINGIAN-COLLECTIBLES"

    def __init__(
        self,
        chain: Chain,
        minter: Address,
        name: str,
        symbol: str,
    ):
        super().__init__(chain)
        self.minter = minter
        self.name = name
        self.symbol = symbol

        self.owners: dict[int, Address] = {}
        self.approvals: dict[int, Address] = {}
        self.next_id = 0

    @property
    def total_supply(self) -> int:
        """Assets currently in existence."""
        return len(self.owners)

    def exists(self, asset_id: int) -> bool:
        return asset_id in self.owners

    def owner_of(self, asset_id: int) -> Address:
        if asset_id not in self.owners:
            raise NonexistentAsset(f"asset {asset_id} does not exist")
        return self.owners[asset_id]

    def approved_for(self, asset_id: int) -> Address | None:
        """Account allowed to move the asset on the owner's behalf."""
        self.owner_of(asset_id)
        return self.approvals.get(asset_id)

    def balance_of(self, owner: Address) -> int:
        return sum(1 for holder in self.owners.values() if holder == owner)

    @transaction
    def mint(self, to: Address, *, sender: Address) -> int:
        """Create a new asset for ``to`` and return its id."""
        self._check_minter(sender)
        asset_id = self.next_id
        self.next_id += 1
        self.owners[asset_id] = to
        return asset_id

    @transaction
    def burn(self, asset_id: int, *, sender: Address) -> None:
        """Destroy an asset. The minter may only burn what it owns."""
        self._check_minter(sender)
        if self.owner_of(asset_id) != sender:
            raise NotOwner(f"{sender} does not own asset {asset_id}")
        del self.owners[asset_id]
        self.approvals.pop(asset_id, None)

    @transaction
    def approve(self, asset_id: int, operator: Address | None, *, sender: Address) -> None:
        """Let ``operator`` transfer the asset. Owner only."""
        if self.owner_of(asset_id) != sender:
            raise NotOwner(f"{sender} does not own asset {asset_id}")
        if operator is None:
            self.approvals.pop(asset_id, None)
        else:
            self.approvals[asset_id] = operator

    @transaction
    def transfer(
        self,
        asset_id: int,
        from_: Address,
        to: Address,
        *,
        sender: Address,
    ) -> None:
        """Move an asset. Caller must be the owner or its approved operator."""
        owner = self.owner_of(asset_id)
        if owner != from_:
            raise NotOwner(f"{from_} does not own asset {asset_id}")
        if sender != owner and self.approvals.get(asset_id) != sender:
            raise NotApproved(f"{sender} may not move asset {asset_id}")
        self.approvals.pop(asset_id, None)
        self.owners[asset_id] = to

    def _check_minter(self, sender: Address) -> None:
        if sender != self.minter:
            raise Unauthorized(sender, "minter")
