"""The assembled runtime: its version, parameters and the modules it runs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable

from .frame import Balances, System
from .kitties import U32_MAX, KittiesModule
from .template import TemplateModule

MILLISECS_PER_BLOCK = 6000
SLOT_DURATION = MILLISECS_PER_BLOCK

MINUTES = 60_000 // MILLISECS_PER_BLOCK
HOURS = MINUTES * 60
DAYS = HOURS * 24
EPOCH_DURATION_IN_BLOCKS = 10 * MINUTES

# One in four blocks, on average, is a primary block.
PRIMARY_PROBABILITY = (1, 4)

BLOCK_HASH_COUNT = 250
MAXIMUM_BLOCK_WEIGHT = 1_000_000
AVAILABLE_BLOCK_RATIO_PERCENT = 75
MAXIMUM_BLOCK_LENGTH = 5 * 1024 * 1024
MINIMUM_PERIOD = 1000
EXPECTED_BLOCK_TIME = MILLISECS_PER_BLOCK
EPOCH_DURATION = EPOCH_DURATION_IN_BLOCKS

EXISTENTIAL_DEPOSIT = 500
TRANSFER_FEE = 0
CREATION_FEE = 0
TRANSACTION_BASE_FEE = 0
TRANSACTION_BYTE_FEE = 1

KITTY_INDEX_MAX = U32_MAX

# What each endowed account receives at genesis.
ENDOWMENT = 1 << 60


@dataclass(frozen=True)
class RuntimeVersion:
    """Names and version numbers that identify a runtime."""

    spec_name: str
    impl_name: str
    authoring_version: int
    spec_version: int
    impl_version: int


VERSION = RuntimeVersion(
    spec_name="substrate-kitties",
    impl_name="substrate-kitties",
    authoring_version=3,
    spec_version=4,
    impl_version=4,
)


def native_version() -> RuntimeVersion:
    """The version that identifies this runtime when run natively."""
    return VERSION


class Runtime:
    """System, balances, the template module and kitties, wired together."""

    version = VERSION

    def __init__(self) -> None:
        self.system = System()
        self.balances = Balances(
            existential_deposit=EXISTENTIAL_DEPOSIT,
            transfer_fee=TRANSFER_FEE,
            creation_fee=CREATION_FEE,
        )
        self.template = TemplateModule(self.system)
        self.kitties = KittiesModule(self.system, self.balances, KITTY_INDEX_MAX)

    def endow(self, account: Hashable, amount: int = ENDOWMENT) -> int:
        """Add ``amount`` to the free balance of ``account``; return the new balance."""
        if amount < 0:
            raise ValueError(f"endowment must be non-negative, got {amount}")
        self.balances.set_balance(account, self.balances.free_balance(account) + amount)
        return self.balances.free_balance(account)

    def next_block(self) -> int:
        """Start the next block and return its number."""
        number = self.system.block_number + 1
        self.system.set_block_number(number)
        return number