"""Creating, breeding, trading and transferring kitties."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Hashable, Optional, Protocol

from .codec import encode_option, encode_uint
from .frame import DispatchError, Origin, System, ensure_signed
from .kitty import Kitty, breed_dna
from .linked_item import LinkedItem, LinkedList

U32_MAX = (1 << 32) - 1


class Currency(Protocol):
    """Anything that can move funds between accounts."""

    def transfer(self, source: Hashable, dest: Hashable, amount: int) -> None:
        ...


@dataclass(frozen=True)
class Created:
    """Event: a kitty was created for ``owner``."""

    owner: Hashable
    kitty_id: int


@dataclass(frozen=True)
class Transferred:
    """Event: a kitty moved from ``sender`` to ``to``."""

    sender: Hashable
    to: Hashable
    kitty_id: int


@dataclass(frozen=True)
class Ask:
    """Event: a kitty's price was set, or cleared when ``price`` is ``None``."""

    owner: Hashable
    kitty_id: int
    price: Optional[int]


@dataclass(frozen=True)
class Sold:
    """Event: a kitty was sold from ``seller`` to ``buyer`` for ``price``."""

    seller: Hashable
    buyer: Hashable
    kitty_id: int
    price: int


class KittiesModule:
    """Keeps kitties, their owners and their prices."""

    def __init__(
        self, system: System, currency: Currency, max_index: int = U32_MAX
    ) -> None:
        if max_index < 0:
            raise ValueError(f"max_index must be non-negative, got {max_index}")
        self.system = system
        self.currency = currency
        self.max_index = max_index
        self._kitties: dict[int, Kitty] = {}
        self._count = 0
        self._owned: LinkedList[int] = LinkedList()
        self._owners: dict[int, Hashable] = {}
        self._prices: dict[int, int] = {}

    # Queries

    def kitty(self, kitty_id: int) -> Optional[Kitty]:
        """The kitty with ``kitty_id``, if it exists."""
        return self._kitties.get(kitty_id)

    def kitties_count(self) -> int:
        """Number of kitties so far, which is also the next kitty id."""
        return self._count

    def kitty_owner(self, kitty_id: int) -> Optional[Hashable]:
        """The owner of ``kitty_id``, if it exists."""
        return self._owners.get(kitty_id)

    def kitty_price(self, kitty_id: int) -> Optional[int]:
        """The asking price of ``kitty_id``; ``None`` means not for sale."""
        return self._prices.get(kitty_id)

    def owned_kitties(
        self, account: Hashable, kitty_id: Optional[int]
    ) -> Optional[LinkedItem[int]]:
        """The list links of ``kitty_id`` in ``account``'s list (``None`` for the head)."""
        return self._owned.get(account, kitty_id)

    def owned_kitty_ids(self, account: Hashable) -> list[int]:
        """Ids of the kitties ``account`` owns, in the order they were received."""
        return list(self._owned.values(account))

    # Calls

    def create(self, origin: Origin) -> int:
        """Create a kitty with random DNA for the caller; return its id."""
        sender = ensure_signed(origin)
        kitty_id = self._next_kitty_id()
        self._insert_kitty(sender, kitty_id, Kitty(self._random_value(sender)))
        self.system.deposit_event(Created(sender, kitty_id))
        return kitty_id

    def breed(self, origin: Origin, kitty_id_1: int, kitty_id_2: int) -> int:
        """Breed two of the caller's kitties into a new one; return its id."""
        sender = ensure_signed(origin)
        kitty1 = self.kitty(kitty_id_1)
        kitty2 = self.kitty(kitty_id_2)
        if kitty1 is None:
            raise DispatchError("Invalid kitty_id_1")
        if kitty2 is None:
            raise DispatchError("Invalid kitty_id_2")
        if kitty_id_1 == kitty_id_2:
            raise DispatchError("Needs different parent")
        if self.kitty_owner(kitty_id_1) != sender:
            raise DispatchError("Not owner of kitty1")
        if self.kitty_owner(kitty_id_2) != sender:
            raise DispatchError("Not owner of kitty2")

        kitty_id = self._next_kitty_id()
        selector = self._random_value(sender)
        child = Kitty(breed_dna(kitty1.dna, kitty2.dna, selector))
        self._insert_kitty(sender, kitty_id, child)
        self.system.deposit_event(Created(sender, kitty_id))
        return kitty_id

    def transfer(self, origin: Origin, to: Hashable, kitty_id: int) -> None:
        """Give one of the caller's kitties to ``to``."""
        sender = ensure_signed(origin)
        if self.owned_kitties(sender, kitty_id) is None:
            raise DispatchError("Only owner can transfer kitty")
        self._do_transfer(sender, to, kitty_id)
        self.system.deposit_event(Transferred(sender, to, kitty_id))

    def ask(self, origin: Origin, kitty_id: int, price: Optional[int]) -> None:
        """Put one of the caller's kitties up for sale, or delist it with ``None``."""
        sender = ensure_signed(origin)
        if self.owned_kitties(sender, kitty_id) is None:
            raise DispatchError("Only owner can set price for kitty")
        if price is None:
            self._prices.pop(kitty_id, None)
        else:
            if price < 0:
                raise ValueError(f"price must be non-negative, got {price}")
            self._prices[kitty_id] = price
        self.system.deposit_event(Ask(sender, kitty_id, price))

    def buy(self, origin: Origin, kitty_id: int, price: int) -> None:
        """Buy a kitty for sale, paying its asking price if ``price`` covers it."""
        sender = ensure_signed(origin)
        owner = self.kitty_owner(kitty_id)
        if owner is None:
            raise DispatchError("Kitty does not exist")
        kitty_price = self.kitty_price(kitty_id)
        if kitty_price is None:
            raise DispatchError("Kitty not for sale")
        if price < kitty_price:
            raise DispatchError("Price is too low")

        self.currency.transfer(sender, owner, kitty_price)
        self._prices.pop(kitty_id, None)
        self._do_transfer(owner, sender, kitty_id)
        self.system.deposit_event(Sold(owner, sender, kitty_id, kitty_price))

    # Internals

    def _random_value(self, sender: Hashable) -> bytes:
        payload = b"".join(
            (
                self.system.random_seed(),
                repr(sender).encode("utf-8"),
                encode_option(self.system.extrinsic_index, lambda i: encode_uint(i, 32)),
                encode_uint(self.system.block_number, 64),
            )
        )
        return hashlib.blake2b(payload, digest_size=16).digest()

    def _next_kitty_id(self) -> int:
        if self._count == self.max_index:
            raise DispatchError("Kitties count overflow")
        return self._count

    def _insert_kitty(self, owner: Hashable, kitty_id: int, kitty: Kitty) -> None:
        self._kitties[kitty_id] = kitty
        self._count = kitty_id + 1
        self._owners[kitty_id] = owner
        self._owned.append(owner, kitty_id)

    def _do_transfer(self, sender: Hashable, to: Hashable, kitty_id: int) -> None:
        self._owned.remove(sender, kitty_id)
        self._owned.append(to, kitty_id)
        self._owners[kitty_id] = to