"""
In-memory execution environment for Matrix contracts.

Holds native-currency balances, the event log and a registry of deployed
contracts. Entry points wrapped with ``transaction`` run atomically: any
exception restores balances, events and every contract's storage to the
state captured when the call began.
"""

import copy
import functools
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import asdict, dataclass
from typing import Any, ClassVar, TypeVar

from .errors import ContractError, InsufficientFunds, InvalidAmount, ReentrantCall, TransferFailed
from .logger import AgentLogger
from .types import Address, Event

F = TypeVar("F", bound=Callable[..., Any])


@dataclass
class ChainSnapshot:
    """Point-in-time copy of chain state."""
    balances: dict[Address, int]
    event_count: int
    storage: dict[Address, dict[str, Any]]


class Chain:
    """
    Serialized ledger of native balances and deployed contracts.

    Calls never interleave; the only suspension points are explicit
    ``send`` payouts into contract ``receive`` hooks.
    """

    def __init__(self):
        self.logger = AgentLogger("CHAIN")
        self.balances: dict[Address, int] = {}
        self.events: list[Event] = []
        self.contracts: dict[Address, "Contract"] = {}
        self._nonce = 0

    def new_address(self) -> Address:
        """Allocate a deterministic contract address."""
        self._nonce += 1
        return f"0x{self._nonce:040x}"

    def register(self, contract: "Contract") -> None:
        """Track a deployed contract for snapshots and receive hooks."""
        self.contracts[contract.address] = contract

    def balance_of(self, account: Address) -> int:
        """Native balance of an account (0 if never funded)."""
        return self.balances.get(account, 0)

    def deal(self, account: Address, amount: int) -> None:
        """Credit an account out of thin air. Seeding only."""
        if amount < 0:
            raise InvalidAmount(f"cannot deal negative amount {amount}")
        self.balances[account] = self.balance_of(account) + amount

    def transfer_value(self, sender: Address, recipient: Address, amount: int) -> None:
        """Move value attached to a call from the caller to the callee."""
        if amount < 0:
            raise InvalidAmount(f"negative value {amount}")
        if self.balance_of(sender) < amount:
            raise InsufficientFunds(
                f"{sender} holds {self.balance_of(sender)}, needs {amount}"
            )
        self._move(sender, recipient, amount)

    def send(self, sender: Address, recipient: Address, amount: int) -> None:
        """
        Pay out native currency, invoking the recipient's receive hook.

        A shortfall or a revert inside the hook undoes the payment and
        surfaces as TransferFailed.
        """
        if amount < 0:
            raise InvalidAmount(f"negative value {amount}")
        snapshot = self.snapshot()
        try:
            if self.balance_of(sender) < amount:
                raise InsufficientFunds(
                    f"{sender} holds {self.balance_of(sender)}, needs {amount}"
                )
            self._move(sender, recipient, amount)
            receiver = self.contracts.get(recipient)
            if receiver is not None:
                receiver.receive(sender, amount)
        except ContractError as exc:
            self.restore(snapshot)
            raise TransferFailed(f"send of {amount} to {recipient} failed") from exc

    def emit(self, event: Event) -> None:
        """Append an event to the log."""
        self.events.append(event)

    def events_of(self, event_type: type) -> list[Event]:
        """Events of one type, oldest first."""
        return [e for e in self.events if isinstance(e, event_type)]

    def snapshot(self) -> ChainSnapshot:
        """Capture balances, event log length and contract storage."""
        return ChainSnapshot(
            balances=dict(self.balances),
            event_count=len(self.events),
            storage={
                address: contract.dump_storage()
                for address, contract in self.contracts.items()
            },
        )

    def restore(self, snapshot: ChainSnapshot) -> None:
        """
        Roll every tracked piece of state back to a snapshot.

        Contracts deployed after the snapshot are unregistered.
        """
        self.balances = dict(snapshot.balances)
        del self.events[snapshot.event_count:]
        for address in list(self.contracts):
            if address not in snapshot.storage:
                del self.contracts[address]
        for address, state in snapshot.storage.items():
            self.contracts[address].load_storage(state)

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Run a block, restoring the chain if it raises."""
        snapshot = self.snapshot()
        try:
            yield
        except Exception:
            self.restore(snapshot)
            raise

    def _move(self, sender: Address, recipient: Address, amount: int) -> None:
        self.balances[sender] = self.balance_of(sender) - amount
        self.balances[recipient] = self.balance_of(recipient) + amount


class Contract:
    """
    Base for stateful components deployed on a Chain.

    Subclasses list their mutable attributes in ``storage_fields`` so the
    chain can snapshot and restore them.
    """

    storage_fields: ClassVar[tuple[str, ...]] = ()
    agent_name: ClassVar[str] = "CONTRACT"

    def __init__(self, chain: Chain, address: Address | None = None):
        self.chain = chain
        self.address = address or chain.new_address()
        self.logger = AgentLogger(self.agent_name, address=self.address)
        self._entered = False
        chain.register(self)

    @property
    def balance(self) -> int:
        """Native balance held by this contract."""
        return self.chain.balance_of(self.address)

    def dump_storage(self) -> dict[str, Any]:
        return {name: copy.deepcopy(getattr(self, name)) for name in self.storage_fields}

    def load_storage(self, state: dict[str, Any]) -> None:
        for name, value in state.items():
            setattr(self, name, copy.deepcopy(value))

    def receive(self, sender: Address, value: int) -> None:
        """Hook run when native currency is sent here. Accepts by default."""

    def emit(self, event: Event) -> None:
        """Record an event and log it."""
        self.chain.emit(event)
        self.logger.info(event.name, **asdict(event))

    def _collect(self, sender: Address, value: int) -> None:
        """Take the value attached to a payable call."""
        if value:
            self.chain.transfer_value(sender, self.address, value)


def transaction(method: F) -> F:
    """Run a contract entry point atomically, reverting all state on failure."""

    @functools.wraps(method)
    def wrapper(self: Contract, *args: Any, **kwargs: Any) -> Any:
        snapshot = self.chain.snapshot()
        try:
            return method(self, *args, **kwargs)
        except Exception as exc:
            self.chain.restore(snapshot)
            self.logger.warning(
                "Call reverted",
                call=method.__name__,
                error=type(exc).__name__,
                reason=str(exc),
            )
            raise

    return wrapper  # type: ignore[return-value]


def non_reentrant(method: F) -> F:
    """Reject re-entry into any guarded entry point of the same instance."""

    @functools.wraps(method)
    def wrapper(self: Contract, *args: Any, **kwargs: Any) -> Any:
        if self._entered:
            raise ReentrantCall(f"{type(self).__name__}.{method.__name__} re-entered")
        self._entered = True
        try:
            return method(self, *args, **kwargs)
        finally:
            self._entered = False

    return wrapper  # type: ignore[return-value]
