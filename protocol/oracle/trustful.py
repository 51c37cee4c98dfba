"""
ORACLE - Trustful Price Oracle

Stores one price per (source, symbol) and derives the consensus price as
the median across every currently trusted source. Sources that never
reported count as zero; the median is not corrected for them.
"""

from collections.abc import Sequence

from seraph import AccessRegistry
from shared import (
    Address,
    Chain,
    Contract,
    InitState,
    InvalidAmount,
    LengthMismatch,
    NotEnoughSources,
    PriceUpdated,
    Role,
    ScopedRole,
    Unauthorized,
    get_config,
    transaction,
)

from .aggregator import median_price


class PriceOracle(Contract):
    """
    Median price oracle fed by role-gated sources.

    Source and initializer roles are scoped to this oracle's address, so
    oracles sharing a registry never honor each other's members. An
    optional initializer may seed prices exactly once through
    ``bootstrap``; the capability is renounced in the same call.
    """

    storage_fields = ("prices", "init_state")
    agent_name = "ORACLE-TRUSTFUL"

    def __init__(
        self,
        chain: Chain,
        registry: AccessRegistry,
        sources: Sequence[Address],
        *,
        deployer: Address,
        initializer: Address | None = None,
        min_sources: int | None = None,
    ):
        with chain.atomic():
            super().__init__(chain)
            config = get_config().oracle
            self.registry = registry
            self.min_sources = max(
                1, min_sources if min_sources is not None else config.min_sources
            )
            self.source_role = ScopedRole(Role.TRUSTED_SOURCE, self.address)
            self.initializer_role = ScopedRole(Role.INITIALIZER, self.address)
            self.prices: dict[tuple[Address, str], int] = {}
            self.init_state = InitState.INITIALIZED

            # Duplicates collapse into one membership
            unique_sources = list(dict.fromkeys(sources))
            if len(unique_sources) < self.min_sources:
                raise NotEnoughSources(
                    f"{len(unique_sources)} sources, at least {self.min_sources} required"
                )

            for source in unique_sources:
                registry.grant(self.source_role, source, sender=deployer)

            if initializer is not None:
                registry.grant(self.initializer_role, initializer, sender=deployer)
                self.init_state = InitState.UNINITIALIZED

        self.logger.info(
            "Price oracle initialized",
            sources=len(unique_sources),
            min_sources=self.min_sources,
            init_state=self.init_state.value,
        )

    @property
    def sources(self) -> tuple[Address, ...]:
        """Trusted sources in registry order."""
        return self.registry.members(self.source_role)

    @transaction
    def bootstrap(
        self,
        sources: Sequence[Address],
        symbols: Sequence[str],
        prices: Sequence[int],
        *,
        sender: Address,
    ) -> None:
        """Seed initial prices once, then give up the initializer role for good."""
        if self.init_state is not InitState.UNINITIALIZED:
            raise Unauthorized(sender, self.initializer_role.value)
        self.registry.check_role(self.initializer_role, sender)

        if not len(sources) == len(symbols) == len(prices):
            raise LengthMismatch(
                f"sources={len(sources)} symbols={len(symbols)} prices={len(prices)}"
            )

        for source, symbol, price in zip(sources, symbols, prices):
            self._set_price(source, symbol, price)

        self.registry.renounce(self.initializer_role, sender, sender=sender)
        self.init_state = InitState.INITIALIZED

        self.logger.info("Oracle bootstrapped", records=len(prices))

    @transaction
    def post_price(self, symbol: str, price: int, *, sender: Address) -> None:
        """Overwrite the caller's price for a symbol. Trusted sources only."""
        self.registry.check_role(self.source_role, sender)
        self._set_price(sender, symbol, price)

    def price_of(self, symbol: str, source: Address) -> int:
        """Price last reported by a source, 0 if it never reported."""
        return self.prices.get((source, symbol), 0)

    def all_prices(self, symbol: str) -> list[int]:
        """One price per trusted source, zero-filled, in registry order."""
        return [self.price_of(symbol, source) for source in self.sources]

    def consensus_price(self, symbol: str) -> int:
        """Median across all trusted sources, recomputed on every call."""
        prices = self.all_prices(symbol)
        if not prices:
            raise NotEnoughSources("no trusted sources registered")
        return median_price(prices)

    def _set_price(self, source: Address, symbol: str, price: int) -> None:
        if price < 0:
            raise InvalidAmount(f"negative price {price}")
        old_price = self.price_of(symbol, source)
        self.prices[(source, symbol)] = price
        self.emit(PriceUpdated(source=source, symbol=symbol, old_price=old_price, new_price=price))
