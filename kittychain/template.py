"""A minimal module that stores one number and reports who stored it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Optional

from .frame import Origin, System, ensure_signed

_U32_LIMIT = 1 << 32


@dataclass(frozen=True)
class SomethingStored:
    """Event: ``who`` stored ``something``."""

    something: int
    who: Hashable


class TemplateModule:
    """Keeps a single optional 32-bit value."""

    def __init__(self, system: System) -> None:
        self.system = system
        self._something: Optional[int] = None

    def do_something(self, origin: Origin, something: int) -> None:
        """Store ``something`` for a signed caller and deposit an event."""
        who = ensure_signed(origin)
        if not 0 <= something < _U32_LIMIT:
            raise ValueError(f"{something} does not fit in an unsigned 32-bit integer")
        self._something = something
        self.system.deposit_event(SomethingStored(something, who))

    def something(self) -> Optional[int]:
        """The stored value, or ``None`` if nothing has been stored."""
        return self._something