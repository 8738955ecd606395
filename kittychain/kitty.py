"""Kitties and the mixing of their DNA."""

from __future__ import annotations

from dataclasses import dataclass

from .codec import CodecError, Input, Source

DNA_LENGTH = 16


@dataclass(frozen=True)
class Kitty:
    """A kitty, identified by 16 bytes of DNA."""

    dna: bytes

    def __post_init__(self) -> None:
        dna = bytes(self.dna)
        if len(dna) != DNA_LENGTH:
            raise ValueError(f"kitty DNA must be {DNA_LENGTH} bytes, got {len(dna)}")
        object.__setattr__(self, "dna", dna)

    def encode(self) -> bytes:
        """Encode the kitty as its raw DNA bytes."""
        return self.dna

    @classmethod
    def decode(cls, stream: Source) -> "Kitty":
        """Decode a kitty from 16 raw DNA bytes."""
        source = stream if isinstance(stream, Input) else Input(stream)
        try:
            return cls(source.read(DNA_LENGTH))
        except CodecError as exc:
            raise CodecError(f"cannot decode kitty: {exc}") from exc


def combine_dna(dna1: int, dna2: int, selector: int) -> int:
    """Take bits from ``dna1`` where ``selector`` is set, else from ``dna2``."""
    return ((selector & dna1) | (~selector & dna2)) & 0xFF


def breed_dna(dna1: bytes, dna2: bytes, selector: bytes) -> bytes:
    """Combine two parents' DNA byte by byte under a selector."""
    if not len(dna1) == len(dna2) == len(selector):
        raise ValueError("DNA and selector must have the same length")
    return bytes(combine_dna(a, b, s) for a, b, s in zip(dna1, dna2, selector))