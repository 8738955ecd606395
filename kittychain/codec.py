"""Compact binary encoding of integers, booleans, options, vectors and enums.

All fixed-width integers are little-endian. Lengths and compact integers use
a variable-length form whose two lowest bits of the first byte select the mode.
"""

from __future__ import annotations

from typing import Callable, Iterable, TypeVar, Union

T = TypeVar("T")

_SUPPORTED_BITS = (8, 16, 32, 64, 128, 256)
_SINGLE_BYTE_LIMIT = 1 << 6
_TWO_BYTE_LIMIT = 1 << 14
_FOUR_BYTE_LIMIT = 1 << 30
_MAX_BIG_INT_BYTES = 4 + 63


class CodecError(ValueError):
    """Raised when a value cannot be encoded or bytes cannot be decoded."""


class Input:
    """A read cursor over a byte string."""

    def __init__(self, data: Union[bytes, bytearray, memoryview]) -> None:
        self._data = bytes(data)
        self._offset = 0

    def read(self, size: int) -> bytes:
        """Take the next ``size`` bytes, raising if fewer are left."""
        if size < 0:
            raise CodecError(f"cannot read a negative number of bytes: {size}")
        end = self._offset + size
        if end > len(self._data):
            raise CodecError(
                f"not enough data: wanted {size} bytes, {self.remaining()} left"
            )
        chunk = self._data[self._offset:end]
        self._offset = end
        return chunk

    def read_byte(self) -> int:
        """Take the next single byte as an integer."""
        return self.read(1)[0]

    def remaining(self) -> int:
        """Number of bytes not yet read."""
        return len(self._data) - self._offset


Source = Union[Input, bytes, bytearray, memoryview]


def _stream(source: Source) -> Input:
    return source if isinstance(source, Input) else Input(source)


def _check_bits(bits: int) -> None:
    if bits not in _SUPPORTED_BITS:
        raise CodecError(f"unsupported integer width: {bits} bits")


def encode_uint(value: int, bits: int) -> bytes:
    """Encode an unsigned integer of the given width, little-endian."""
    _check_bits(bits)
    if not 0 <= value < (1 << bits):
        raise CodecError(f"{value} does not fit in an unsigned {bits}-bit integer")
    return value.to_bytes(bits // 8, "little")


def decode_uint(stream: Source, bits: int) -> int:
    """Decode an unsigned little-endian integer of the given width."""
    _check_bits(bits)
    return int.from_bytes(_stream(stream).read(bits // 8), "little")


def encode_bool(value: bool) -> bytes:
    """Encode a boolean as one byte, 1 or 0."""
    return encode_uint(int(bool(value)), 8)


def decode_bool(stream: Source) -> bool:
    """Decode a boolean, rejecting any byte other than 0 or 1."""
    byte = _stream(stream).read_byte()
    if byte == 0:
        return False
    if byte == 1:
        return True
    raise CodecError(f"invalid boolean byte: {byte:#04x}")


def encode_compact(value: int) -> bytes:
    """Encode a non-negative integer in the variable-length compact form."""
    if value < 0:
        raise CodecError(f"compact integers must be non-negative, got {value}")
    if value < _SINGLE_BYTE_LIMIT:
        return bytes([value << 2])
    if value < _TWO_BYTE_LIMIT:
        return ((value << 2) | 0b01).to_bytes(2, "little")
    if value < _FOUR_BYTE_LIMIT:
        return ((value << 2) | 0b10).to_bytes(4, "little")
    length = max(4, (value.bit_length() + 7) // 8)
    if length > _MAX_BIG_INT_BYTES:
        raise CodecError(f"{value} is too large for compact encoding")
    return bytes([((length - 4) << 2) | 0b11]) + value.to_bytes(length, "little")


def decode_compact(stream: Source) -> int:
    """Decode a compact integer, rejecting non-canonical encodings."""
    source = _stream(stream)
    first = source.read_byte()
    mode = first & 0b11
    if mode == 0b00:
        return first >> 2
    if mode == 0b01:
        value = int.from_bytes(bytes([first]) + source.read(1), "little") >> 2
        if value < _SINGLE_BYTE_LIMIT:
            raise CodecError("non-canonical compact integer")
        return value
    if mode == 0b10:
        value = int.from_bytes(bytes([first]) + source.read(3), "little") >> 2
        if value < _TWO_BYTE_LIMIT:
            raise CodecError("non-canonical compact integer")
        return value
    length = (first >> 2) + 4
    raw = source.read(length)
    value = int.from_bytes(raw, "little")
    if value < _FOUR_BYTE_LIMIT or (length > 4 and raw[-1] == 0):
        raise CodecError("non-canonical compact integer")
    return value


def encode_option(value: T | None, encode_item: Callable[[T], bytes]) -> bytes:
    """Encode an optional value: 0 for none, 1 followed by the value otherwise."""
    if value is None:
        return b"\x00"
    return b"\x01" + encode_item(value)


def decode_option(stream: Source, decode_item: Callable[[Input], T]) -> T | None:
    """Decode an optional value written by :func:`encode_option`."""
    source = _stream(stream)
    tag = source.read_byte()
    if tag == 0:
        return None
    if tag == 1:
        return decode_item(source)
    raise CodecError(f"invalid option tag: {tag:#04x}")


def encode_vec(items: Iterable[T], encode_item: Callable[[T], bytes]) -> bytes:
    """Encode a sequence as its compact length followed by each item."""
    encoded = [encode_item(item) for item in items]
    return encode_compact(len(encoded)) + b"".join(encoded)


def decode_vec(stream: Source, decode_item: Callable[[Input], T]) -> list[T]:
    """Decode a sequence written by :func:`encode_vec`."""
    source = _stream(stream)
    count = decode_compact(source)
    return [decode_item(source) for _ in range(count)]


def encode_enum(index: int, *args: bytes) -> bytes:
    """Encode an enum variant: its index byte followed by its encoded fields."""
    if not 0 <= index <= 0xFF:
        raise CodecError(f"enum index out of range: {index}")
    return bytes([index]) + b"".join(args)