"""MurmurHash3, 32-bit x86 variant.

The preload table is only valid for the exact hash it was built with,
so this must stay bit-exact with the reference implementation
(Appleby, MurmurHash3_x86_32). Both table construction and every
lookup go through murmur3_32().

Input is consumed in 4-byte little-endian blocks. Each block is
scrambled (multiply, rotate 15, multiply) and folded into the running
state (xor, rotate 13, h*5 + 0xe6546b64). A 1-3 byte tail is scrambled
the same way but folded with xor only. The finalizer mixes in the
length and runs the fmix32 avalanche.
"""

from __future__ import annotations

import struct

_MASK32 = 0xFFFFFFFF

_C1 = 0xCC9E2D51
_C2 = 0x1B873593
_M = 5
_N = 0xE6546B64

_BLOCK = struct.Struct("<I")


def _rotl32(x: int, r: int) -> int:
    return ((x << r) | (x >> (32 - r))) & _MASK32


def _scramble(k: int) -> int:
    k = (k * _C1) & _MASK32
    k = _rotl32(k, 15)
    return (k * _C2) & _MASK32


def _fmix32(h: int) -> int:
    h ^= h >> 16
    h = (h * 0x85EBCA6B) & _MASK32
    h ^= h >> 13
    h = (h * 0xC2B2AE35) & _MASK32
    h ^= h >> 16
    return h


def murmur3_32(seed: int, data: bytes | str) -> int:
    """Hash data with the given seed. Returns an unsigned 32-bit int.

    str input is hashed as its UTF-8 encoding.
    """
    if isinstance(data, str):
        data = data.encode("utf-8", "surrogatepass")

    h = seed & _MASK32
    length = len(data)
    body = length & ~3

    for (k,) in _BLOCK.iter_unpack(data[:body]):
        h ^= _scramble(k)
        h = _rotl32(h, 13)
        h = (h * _M + _N) & _MASK32

    if body != length:
        # Tail is 1-3 bytes, little-endian like the blocks
        h ^= _scramble(int.from_bytes(data[body:], "little"))

    h ^= length & _MASK32
    return _fmix32(h)
