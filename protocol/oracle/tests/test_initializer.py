"""Tests for the deploy-and-seed oracle initializer."""

import pytest

from oracle import OracleInitializer
from shared import InitState, LengthMismatch, Role

DEPLOYER = "0xdeployer"
SOURCES = ["0xsource_a", "0xsource_b", "0xsource_c"]


class TestOracleInitializer:
    """Test suite for OracleInitializer."""

    def test_deploys_seeded_oracle(self, chain, registry):
        """Test the oracle comes up seeded and locked."""
        initializer = OracleInitializer(
            chain,
            registry,
            SOURCES,
            ["DVNFT"] * 3,
            [999 * 10**18] * 3,
            deployer=DEPLOYER,
        )
        oracle = initializer.oracle

        assert oracle.consensus_price("DVNFT") == 999 * 10**18
        assert oracle.init_state is InitState.INITIALIZED
        assert not registry.has_role(oracle.initializer_role, initializer.address)
        assert registry.members(oracle.initializer_role) == ()
        assert registry.members(oracle.source_role) == tuple(SOURCES)

    def test_mismatched_seed(self, chain, registry):
        """Test bad seed data aborts deployment and leaves no trace."""
        before = chain.snapshot()
        contracts = set(chain.contracts)
        roles = registry.dump_storage()

        with pytest.raises(LengthMismatch):
            OracleInitializer(
                chain,
                registry,
                SOURCES,
                ["DVNFT"] * 3,
                [1, 2],
                deployer=DEPLOYER,
            )

        assert chain.snapshot() == before
        assert set(chain.contracts) == contracts
        assert registry.dump_storage() == roles
        assert registry.members(Role.ADMIN) == (DEPLOYER,)

    def test_redeploy_after_failure(self, chain, registry):
        """Test a clean deployment succeeds after a failed one."""
        with pytest.raises(LengthMismatch):
            OracleInitializer(
                chain, registry, SOURCES, ["DVNFT"] * 2, [1, 2, 3], deployer=DEPLOYER
            )

        initializer = OracleInitializer(
            chain, registry, SOURCES, ["DVNFT"] * 3, [5, 6, 7], deployer=DEPLOYER
        )

        assert initializer.oracle.consensus_price("DVNFT") == 6
        assert len(chain.contracts) == 3
