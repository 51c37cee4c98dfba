"""
ORACLE - Oracle Initializer

Deploys a price oracle with itself as the one-shot initializer and seeds it
in the same step, so no account is ever left holding the capability. A
failed seed unwinds the whole deployment.
"""

from collections.abc import Sequence

from seraph import AccessRegistry
from shared import Address, Chain, Contract

from .trustful import PriceOracle


class OracleInitializer(Contract):
    """Deploy-and-seed helper for PriceOracle."""

    agent_name = "ORACLE-INITIALIZER"

    def __init__(
        self,
        chain: Chain,
        registry: AccessRegistry,
        sources: Sequence[Address],
        symbols: Sequence[str],
        prices: Sequence[int],
        *,
        deployer: Address,
        min_sources: int | None = None,
    ):
        with chain.atomic():
            super().__init__(chain)
            self.oracle = PriceOracle(
                chain,
                registry,
                sources,
                deployer=deployer,
                initializer=self.address,
                min_sources=min_sources,
            )
            self.oracle.bootstrap(sources, symbols, prices, sender=self.address)

        self.logger.info("Oracle deployed and seeded", oracle=self.oracle.address)
