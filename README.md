# kittychain

An in-memory kitties runtime for Python, using only the standard library.

## Modules

- `kittychain.codec`: a compact binary codec.
  - `encode_uint` / `decode_uint` for little-endian unsigned integers of 8, 16,
    32, 64, 128 or 256 bits.
  - `encode_bool` / `decode_bool`, `encode_option` / `decode_option` and
    `encode_vec` / `decode_vec`. A vector is written as a compact length
    followed by its items.
  - `encode_compact` / `decode_compact` for variable-length integers. The
    decoder rejects encodings that are not canonical.
  - `encode_enum(index, *fields)` for enum variants.
  - `Input`, a read cursor over bytes, with `read`, `read_byte` and
    `remaining`. The decoders accept an `Input` or plain bytes.
  - `CodecError`, a `ValueError`, raised for bad input or values that do not
    fit.
- `kittychain.linked_item`: the list types.
  - `LinkedItem`, a frozen pair of `prev` / `next` links with `encode` and
    `decode`.
  - `LinkedList`, a doubly linked list of values per key, kept in any mutable
    mapping of `(key, value) -> LinkedItem`. The entry `(key, None)` is the
    head. It offers `append`, `remove`, `get` and `values`.
- `kittychain.kitty`: DNA and its mixing.
  - `Kitty`, holding exactly 16 bytes of DNA. It encodes as those raw bytes.
  - `combine_dna(a, b, selector)` takes bits of `a` where the selector is set
    and bits of `b` elsewhere.
  - `breed_dna` applies `combine_dna` byte by byte.
- `kittychain.frame`: what the modules share.
  - `Origin` (`signed`, `root`, `none`) and `ensure_signed`.
  - `System`, which holds the block number, extrinsic index and deposited
    events. It also gives a per-block `random_seed`.
  - `Balances`, with free balances, an existential deposit, a transfer fee and
    a creation fee.
  - `DispatchError`.
- `kittychain.template`: `TemplateModule`, which stores one 32-bit value with
  `do_something` and emits `SomethingStored`.
- `kittychain.kitties`: `KittiesModule`.
  - Calls: `create`, `breed`, `transfer`, `ask` and `buy`.
  - Queries: `kitty`, `kitties_count`, `kitty_owner`, `kitty_price`,
    `owned_kitties` and `owned_kitty_ids`.
  - Events: `Created`, `Transferred`, `Ask` and `Sold`.
- `kittychain.runtime`: the assembled runtime.
  - `Runtime` wires `System`, `Balances` (existential deposit 500),
    `TemplateModule` and `KittiesModule` together.
  - `Runtime.endow` credits an account and `Runtime.next_block` starts a new
    block.
  - `RuntimeVersion` and `native_version()` identify the runtime.

## Install

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Encoding

```python
from kittychain.codec import Input, encode_compact, decode_compact, encode_uint

assert encode_uint(1, 32) == b"\x01\x00\x00\x00"
assert encode_compact(64) == bytes([0b00000001, 0b00000001])
assert decode_compact(Input(encode_compact(16384))) == 16384
```

## Linked lists over storage

```python
from kittychain.linked_item import LinkedList

storage = {}
owned = LinkedList(storage)
owned.append("alice", 1)
owned.append("alice", 2)
owned.remove("alice", 1)
assert list(owned.values("alice")) == [2]
```

## Kitties

```python
from kittychain.frame import Origin, DispatchError
from kittychain.runtime import Runtime

runtime = Runtime()
runtime.endow("alice")
runtime.endow("bob")

runtime.kitties.create(Origin.signed("alice"))
runtime.kitties.create(Origin.signed("alice"))
runtime.kitties.breed(Origin.signed("alice"), 0, 1)
assert runtime.kitties.kitties_count() == 3

runtime.kitties.ask(Origin.signed("alice"), 2, 100)
runtime.kitties.buy(Origin.signed("bob"), 2, 100)
assert runtime.kitties.kitty_owner(2) == "bob"
assert runtime.kitties.owned_kitty_ids("bob") == [2]

try:
    runtime.kitties.transfer(Origin.signed("alice"), "bob", 2)
except DispatchError as err:
    print(err)  # Only owner can transfer kitty
```

The kitties calls check their conditions before they change storage. A failed
check raises `DispatchError`, and so does an unsigned origin. Events land in
`runtime.system.events` and are cleared when `next_block` starts a new block.

Kitty DNA comes from a BLAKE2 hash of the block's seed, the caller, the
extrinsic index and the block number. It is deterministic, not secure
randomness.

Buying moves funds through `Balances.transfer`. That transfer is refused if it
would leave the seller's new account under the existential deposit. For this
reason the example endows both accounts.

## What it does not do

Everything lives in memory inside one Python process. There is no:

- block production, consensus or networking;
- persistent storage;
- transaction pool, signatures or fees per byte;
- command-line program.

Blocks advance only when `Runtime.next_block` is called.