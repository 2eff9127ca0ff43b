"""Incremental 32-bit MurmurHash3 used for prediction context hashing."""

from __future__ import annotations

import struct
from collections.abc import Iterable

_MASK = 0xFFFFFFFF
_C1 = 0xCC9E2D51
_C2 = 0x1B873593


def _rotl(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (32 - shift))) & _MASK


def _mix_k(k: int) -> int:
    k = (k * _C1) & _MASK
    k = _rotl(k, 15)
    return (k * _C2) & _MASK


def _fmix(h: int) -> int:
    h ^= h >> 16
    h = (h * 0x85EBCA6B) & _MASK
    h ^= h >> 13
    h = (h * 0xC2B2AE35) & _MASK
    h ^= h >> 16
    return h


class MurmurHasher:
    """Streaming MurmurHash3 (x86, 32-bit) over the bytes written to it."""

    __slots__ = ("_h", "_length", "_tail")

    def __init__(self, seed: int = 0) -> None:
        self._h = seed & _MASK
        self._length = 0
        self._tail = b""

    def write(self, data: bytes) -> None:
        """Feed raw bytes into the hash."""
        self._length += len(data)
        buffer = self._tail + bytes(data)
        full = len(buffer) - len(buffer) % 4
        for (k,) in struct.iter_unpack("<I", buffer[:full]):
            self._h ^= _mix_k(k)
            self._h = _rotl(self._h, 13)
            self._h = (self._h * 5 + 0xE6546B64) & _MASK
        self._tail = buffer[full:]

    def write_i32(self, value: int) -> None:
        """Feed a 32-bit integer as four little-endian bytes."""
        self.write(struct.pack("<I", value & _MASK))

    def finish(self) -> int:
        """Return the unsigned 32-bit hash of everything written so far."""
        h = self._h
        if self._tail:
            h ^= _mix_k(int.from_bytes(self._tail, "little"))
        h ^= self._length & _MASK
        return _fmix(h)


def hash_i32s(values: Iterable[int], seed: int = 0) -> int:
    """Hash a sequence of 32-bit integers in one call."""
    hasher = MurmurHasher(seed)
    for value in values:
        hasher.write_i32(value)
    return hasher.finish()