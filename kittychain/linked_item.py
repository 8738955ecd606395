"""A doubly linked list stored as entries of a key-value map."""

from __future__ import annotations

from collections.abc import Hashable, Iterator, MutableMapping
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from .codec import Input, Source, decode_option, encode_option

V = TypeVar("V")


@dataclass(frozen=True)
class LinkedItem(Generic[V]):
    """Links from one list entry to its neighbours."""

    prev: Optional[V] = None
    next: Optional[V] = None

    def encode(self, encode_value: Callable[[V], bytes]) -> bytes:
        """Encode both links as options."""
        return encode_option(self.prev, encode_value) + encode_option(
            self.next, encode_value
        )

    @classmethod
    def decode(
        cls, stream: Source, decode_value: Callable[[Input], V]
    ) -> "LinkedItem[V]":
        """Decode an item written by :meth:`encode`."""
        source = stream if isinstance(stream, Input) else Input(stream)
        prev = decode_option(source, decode_value)
        nxt = decode_option(source, decode_value)
        return cls(prev=prev, next=nxt)


_EMPTY: LinkedItem[Any] = LinkedItem()


class LinkedList(Generic[V]):
    """Per-key linked lists kept in a map of ``(key, value) -> LinkedItem``.

    The entry ``(key, None)`` is the head: its ``next`` is the first value
    and its ``prev`` the last.
    """

    def __init__(
        self, storage: Optional[MutableMapping[tuple[Hashable, Optional[V]], LinkedItem[V]]] = None
    ) -> None:
        self.storage = {} if storage is None else storage

    def _read(self, key: Hashable, value: Optional[V]) -> LinkedItem[V]:
        return self.storage.get((key, value), _EMPTY)

    def _write(self, key: Hashable, value: Optional[V], item: LinkedItem[V]) -> None:
        self.storage[(key, value)] = item

    def get(self, key: Hashable, value: Optional[V]) -> Optional[LinkedItem[V]]:
        """The stored links for ``value`` (``None`` for the head), if any."""
        return self.storage.get((key, value))

    def append(self, key: Hashable, value: V) -> None:
        """Add ``value`` to the end of the list under ``key``."""
        head = self._read(key, None)
        self._write(key, None, LinkedItem(prev=value, next=head.next))

        prev = self._read(key, head.prev)
        self._write(key, head.prev, LinkedItem(prev=prev.prev, next=value))

        self._write(key, value, LinkedItem(prev=head.prev, next=None))

    def remove(self, key: Hashable, value: V) -> None:
        """Unlink ``value`` from the list under ``key``; absent values are ignored."""
        item = self.storage.pop((key, value), None)
        if item is None:
            return

        prev = self._read(key, item.prev)
        self._write(key, item.prev, LinkedItem(prev=prev.prev, next=item.next))

        nxt = self._read(key, item.next)
        self._write(key, item.next, LinkedItem(prev=item.prev, next=nxt.next))

    def values(self, key: Hashable) -> Iterator[V]:
        """Yield the values under ``key`` from first to last."""
        current = self._read(key, None).next
        while current is not None:
            yield current
            current = self._read(key, current).next