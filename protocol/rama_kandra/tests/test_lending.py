"""Tests for the Rama-Kandra lending pool."""

import pytest

from rama_kandra import ExternalReserve, LendingPool
from shared import (
    Borrowed,
    Chain,
    Contract,
    EmptyReserve,
    FungibleLedger,
    InvalidAmount,
    NotEnoughCollateral,
    ReentrantCall,
    TransferFailed,
    get_config,
)

DEPLOYER = "0xdeployer"
ALICE = "0xalice"
BOB = "0xbob"
ATTACKER = "0xattacker"
UNIT = 10**18


class ReentrantBorrower(Contract):
    """Borrows again from inside its collateral refund."""

    agent_name = "TEST-REENTRANT-BORROWER"

    def __init__(self, chain: Chain, pool: LendingPool):
        super().__init__(chain)
        self.pool = pool

    def receive(self, sender: str, value: int) -> None:
        if sender == self.pool.address:
            self.pool.borrow(1, self.address, sender=self.address, value=value)


@pytest.fixture
def token(chain) -> FungibleLedger:
    token = FungibleLedger(chain, owner=DEPLOYER)
    token.mint(DEPLOYER, 10 * UNIT, sender=DEPLOYER)
    return token


@pytest.fixture
def reserve(chain, token) -> ExternalReserve:
    """Balanced reserve: implied price of exactly one."""
    reserve = ExternalReserve(chain, token)
    chain.deal(DEPLOYER, 10 * UNIT)
    token.approve(reserve.address, 10 * UNIT, sender=DEPLOYER)
    reserve.add_liquidity(10 * UNIT, sender=DEPLOYER, value=10 * UNIT)
    return reserve


@pytest.fixture
def pool(chain, token, reserve) -> LendingPool:
    pool = LendingPool(chain, token, reserve, collateral_factor=2, price_scale=UNIT)
    token.mint(pool.address, 100_000 * UNIT, sender=DEPLOYER)
    chain.deal(ALICE, 10_000)
    return pool


class TestRequiredCollateral:
    """Test suite for collateral sizing."""

    def test_initialization(self, pool):
        """Test pool parameters and empty ledger."""
        stats = pool.get_stats()
        assert stats["borrowers"] == 0
        assert stats["collateral_factor"] == 2
        assert stats["available"] == 100_000 * UNIT

    def test_factor_from_settings(self, chain, token, reserve, monkeypatch):
        """Test the collateral factor defaults to settings."""
        monkeypatch.setenv("MATRIX_LENDING__COLLATERAL_FACTOR", "3")
        get_config.cache_clear()
        pool = LendingPool(chain, token, reserve)
        assert pool.collateral_factor == 3
        assert pool.required_collateral(1000) == 3000

    def test_implied_price(self, pool):
        """Test a balanced reserve implies a price of one."""
        assert pool.implied_price() == UNIT

    def test_required_collateral(self, pool):
        """Test k=2 at price one doubles the amount."""
        assert pool.required_collateral(1000) == 2000

    def test_monotonic_in_amount(self, pool):
        """Test larger borrows never need less collateral."""
        amounts = [0, 1, 2, 10, 999, 1000, UNIT, 50 * UNIT]
        required = [pool.required_collateral(a) for a in amounts]
        assert required == sorted(required)

    def test_negative_amount(self, pool):
        """Test negative amounts are invalid."""
        with pytest.raises(InvalidAmount):
            pool.required_collateral(-1)

    def test_empty_reserve(self, chain, token):
        """Test no price can be implied from an empty reserve."""
        pool = LendingPool(chain, token, ExternalReserve(chain, token), collateral_factor=2)
        with pytest.raises(EmptyReserve):
            pool.required_collateral(1000)


class TestBorrow:
    """Test suite for LendingPool.borrow."""

    def test_borrow_exact_collateral(self, chain, token, pool):
        """Test paying exactly the requirement."""
        deposit = pool.borrow(1000, ALICE, sender=ALICE, value=2000)

        assert deposit == 2000
        assert token.balance_of(ALICE) == 1000
        assert pool.deposit_of(ALICE) == 2000
        assert pool.balance == 2000
        assert chain.balance_of(ALICE) == 8000
        assert chain.events_of(Borrowed) == [
            Borrowed(account=ALICE, recipient=ALICE, deposit_required=2000, amount=1000)
        ]

    def test_borrow_short_collateral(self, chain, token, pool):
        """Test one unit short reverts everything."""
        before = chain.snapshot()

        with pytest.raises(NotEnoughCollateral):
            pool.borrow(1000, ALICE, sender=ALICE, value=1999)

        assert chain.snapshot() == before
        assert token.balance_of(ALICE) == 0
        assert pool.deposit_of(ALICE) == 0

    def test_borrow_refunds_excess(self, chain, pool):
        """Test overpayment comes back and only the requirement is recorded."""
        pool.borrow(1000, ALICE, sender=ALICE, value=2500)

        assert chain.balance_of(ALICE) == 8000
        assert pool.deposit_of(ALICE) == 2000

    def test_borrow_to_recipient(self, token, pool):
        """Test tokens go to the named recipient, collateral to the caller."""
        pool.borrow(1000, BOB, sender=ALICE, value=2000)

        assert token.balance_of(BOB) == 1000
        assert token.balance_of(ALICE) == 0
        assert pool.deposit_of(ALICE) == 2000
        assert pool.deposit_of(BOB) == 0

    def test_deposits_accumulate(self, pool):
        """Test the deposit ledger only grows."""
        pool.borrow(1000, ALICE, sender=ALICE, value=2000)
        pool.borrow(500, ALICE, sender=ALICE, value=1000)

        assert pool.deposit_of(ALICE) == 3000
        assert pool.get_stats()["total_deposits"] == 3000

    def test_borrow_zero(self, pool):
        """Test empty borrows are invalid."""
        with pytest.raises(InvalidAmount):
            pool.borrow(0, ALICE, sender=ALICE, value=0)

    def test_borrow_beyond_liquidity(self, chain, token, reserve):
        """Test an underfunded pool fails the transfer and keeps nothing."""
        pool = LendingPool(chain, token, reserve, collateral_factor=2, price_scale=UNIT)
        token.mint(pool.address, 500, sender=DEPLOYER)
        chain.deal(ALICE, 10_000)
        before = chain.snapshot()

        with pytest.raises(TransferFailed):
            pool.borrow(1000, ALICE, sender=ALICE, value=2500)

        assert chain.snapshot() == before
        assert chain.balance_of(ALICE) == 10_000
        assert pool.deposit_of(ALICE) == 0

    def test_reentrant_borrow_reverts(self, chain, pool):
        """Test re-entering from the refund fails the whole borrow."""
        borrower = ReentrantBorrower(chain, pool)
        chain.deal(borrower.address, 10_000)
        before = chain.snapshot()

        with pytest.raises(TransferFailed) as exc_info:
            pool.borrow(1000, borrower.address, sender=borrower.address, value=3000)

        assert isinstance(exc_info.value.__cause__, ReentrantCall)
        assert chain.snapshot() == before


class TestReserveManipulation:
    """Test suite for collateral priced off a movable reserve."""

    def test_dumping_tokens_collapses_collateral(self, chain, token, reserve, pool):
        """Test skewing the reserve ratio slashes the requirement."""
        honest = pool.required_collateral(100 * UNIT)
        assert honest == 200 * UNIT

        token.mint(ATTACKER, 1_000 * UNIT, sender=DEPLOYER)
        token.approve(reserve.address, 1_000 * UNIT, sender=ATTACKER)
        reserve.token_to_native_swap(1_000 * UNIT, 1, sender=ATTACKER)

        skewed = pool.required_collateral(100 * UNIT)
        assert skewed < honest // 1000

        pool.borrow(100 * UNIT, ATTACKER, sender=ATTACKER, value=skewed)
        assert token.balance_of(ATTACKER) == 100 * UNIT
        assert pool.deposit_of(ATTACKER) == skewed

    def test_buying_tokens_raises_collateral(self, chain, reserve, pool):
        """Test the requirement follows the live ratio upward."""
        before = pool.required_collateral(1000)
        chain.deal(BOB, 10 * UNIT)
        reserve.native_to_token_swap(1, sender=BOB, value=10 * UNIT)

        assert pool.required_collateral(1000) > before
