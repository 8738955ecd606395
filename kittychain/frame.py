"""Origins, block state and balances shared by the runtime modules."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Hashable, Optional

from .codec import encode_uint

MAX_BALANCE = (1 << 128) - 1


class DispatchError(Exception):
    """Raised when a dispatched call is rejected."""


class OriginKind(Enum):
    """Who a call claims to come from."""

    SIGNED = "signed"
    ROOT = "root"
    NONE = "none"


@dataclass(frozen=True)
class Origin:
    """The origin of a dispatched call."""

    kind: OriginKind
    account: Optional[Hashable] = None

    @classmethod
    def signed(cls, account: Hashable) -> "Origin":
        """A call signed by ``account``."""
        return cls(OriginKind.SIGNED, account)

    @classmethod
    def root(cls) -> "Origin":
        """A call with root privileges."""
        return cls(OriginKind.ROOT)

    @classmethod
    def none(cls) -> "Origin":
        """An unsigned call."""
        return cls(OriginKind.NONE)


def ensure_signed(origin: Origin) -> Hashable:
    """Return the signing account, or raise if the origin is not signed."""
    if origin.kind is OriginKind.SIGNED:
        return origin.account
    raise DispatchError("bad origin: expected to be a signed origin")


@dataclass
class System:
    """Block number, extrinsic index and the events deposited in a block."""

    block_number: int = 0
    extrinsic_index: Optional[int] = None
    events: list[Any] = field(default_factory=list)

    def __init__(self) -> None:
        self.block_number = 0
        self.extrinsic_index = None
        self.events = []

    def deposit_event(self, event: Any) -> None:
        """Record an event for the current block."""
        self.events.append(event)

    def set_block_number(self, number: int) -> None:
        """Start block ``number``: reset the extrinsic index and the events."""
        if number < 0:
            raise ValueError(f"block number must be non-negative, got {number}")
        self.block_number = number
        self.extrinsic_index = 0
        self.events = []

    def note_extrinsic(self) -> int:
        """Advance to the next extrinsic in the block and return its index."""
        self.extrinsic_index = (self.extrinsic_index or 0) + 1
        return self.extrinsic_index

    def random_seed(self) -> bytes:
        """A 32-byte seed that is fixed for the current block."""
        payload = b"kittychain/random-seed" + encode_uint(self.block_number, 64)
        return hashlib.blake2b(payload, digest_size=32).digest()


class Balances:
    """Free balances of accounts, with fees and an existential deposit."""

    def __init__(
        self,
        existential_deposit: int = 0,
        transfer_fee: int = 0,
        creation_fee: int = 0,
    ) -> None:
        for name, amount in (
            ("existential_deposit", existential_deposit),
            ("transfer_fee", transfer_fee),
            ("creation_fee", creation_fee),
        ):
            if amount < 0:
                raise ValueError(f"{name} must be non-negative, got {amount}")
        self.existential_deposit = existential_deposit
        self.transfer_fee = transfer_fee
        self.creation_fee = creation_fee
        self._free: dict[Hashable, int] = {}

    def free_balance(self, who: Hashable) -> int:
        """The free balance of ``who``; zero for unknown accounts."""
        return self._free.get(who, 0)

    def set_balance(self, who: Hashable, amount: int) -> None:
        """Set the free balance of ``who``, removing the account if too low."""
        if not 0 <= amount <= MAX_BALANCE:
            raise ValueError(f"balance out of range: {amount}")
        if amount < self.existential_deposit or amount == 0:
            self._free.pop(who, None)
        else:
            self._free[who] = amount

    def transfer(self, source: Hashable, dest: Hashable, amount: int) -> None:
        """Move ``amount`` from ``source`` to ``dest``, charging the fee to ``source``."""
        if amount < 0:
            raise ValueError(f"transfer amount must be non-negative, got {amount}")
        from_balance = self.free_balance(source)
        to_balance = self.free_balance(dest)
        would_create = to_balance == 0
        fee = self.creation_fee if would_create else self.transfer_fee
        liability = amount + fee
        if liability > MAX_BALANCE:
            raise DispatchError("got overflow after adding a fee to value")
        if liability > from_balance:
            raise DispatchError("balance too low to send value")
        if would_create and amount < self.existential_deposit:
            raise DispatchError("value too low to create account")
        new_to_balance = to_balance + amount
        if new_to_balance > MAX_BALANCE:
            raise DispatchError("destination balance too high to receive value")
        if source != dest:
            self.set_balance(source, from_balance - liability)
            self.set_balance(dest, new_to_balance)