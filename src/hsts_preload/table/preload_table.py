"""PreloadTable: the immutable two-level lookup table.

Layout:
    names    -- every preloaded name concatenated into one ASCII blob,
                include-subdomains entries first
    level0   -- uint16 displacement seed per first-level bucket
    level1   -- uint32 per slot: low 24 bits = offset into names,
                high 8 bits = name length

A lookup is two hashes and one byte comparison:

    idx  = murmur3_32(0, host)
    seed = level0[idx & mask0]
    if seed: idx = murmur3_32(seed, host)
    slot = level1[idx & mask1]
    found = names[offset:offset+length] == host

Every host lands on *some* slot, so the final comparison is what
separates members from misses. Unused slots hold 0 (a zero-length
name) and never match. Because include-subdomains names sit at
the front of the blob, "does this entry cover subdomains" is just
offset < include_subdomains_end -- no per-entry flag is stored.

Both arrays are power-of-two sized so the modulo is a mask. The table
is never mutated after construction; level0/level1 are exposed as
read-only memoryviews so it can be shared across threads without
locking.
"""

from __future__ import annotations

import array
from collections.abc import Iterable
from typing import NamedTuple

from hsts_preload.hashing.murmur import murmur3_32

OFFSET_MASK = 0x00FFFFFF
LENGTH_SHIFT = 24


class LookupResult(NamedTuple):
    include_subdomains: bool
    found: bool


def _is_pow2(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


class PreloadTable:
    """Read-only minimal perfect hash table over the preloaded names.

    Args:
        names: ASCII blob of all names, in build order.
        level0: Per-bucket displacement seeds (each < 2**16).
        level1: Packed (offset, length) words, one per slot.
        include_subdomains_end: Blob offset one past the last
            include-subdomains name.
        max_dots: Largest dot count of any name in the table.
    """

    __slots__ = (
        "_names",
        "_names_view",
        "_level0",
        "_level1",
        "_mask0",
        "_mask1",
        "_include_subdomains_end",
        "_max_dots",
    )

    def __init__(
        self,
        names: bytes,
        level0: Iterable[int],
        level1: Iterable[int],
        include_subdomains_end: int,
        max_dots: int,
    ) -> None:
        lv0 = array.array("H", level0)
        lv1 = array.array("I", level1)
        if not _is_pow2(len(lv0)):
            raise ValueError(f"level0 size must be a power of two, got {len(lv0)}")
        if not _is_pow2(len(lv1)):
            raise ValueError(f"level1 size must be a power of two, got {len(lv1)}")
        if not (0 <= include_subdomains_end <= len(names)):
            raise ValueError(
                f"include_subdomains_end {include_subdomains_end} outside "
                f"names blob of {len(names)} bytes"
            )
        if max_dots < 0:
            raise ValueError(f"max_dots must be non-negative, got {max_dots}")

        self._names = bytes(names)
        self._names_view = memoryview(self._names)
        self._level0 = lv0
        self._level1 = lv1
        self._mask0 = len(lv0) - 1
        self._mask1 = len(lv1) - 1
        self._include_subdomains_end = include_subdomains_end
        self._max_dots = max_dots

    @property
    def names(self) -> bytes:
        return self._names

    @property
    def level0(self) -> memoryview:
        return memoryview(self._level0).toreadonly()

    @property
    def level1(self) -> memoryview:
        return memoryview(self._level1).toreadonly()

    @property
    def include_subdomains_end(self) -> int:
        return self._include_subdomains_end

    @property
    def max_dots(self) -> int:
        return self._max_dots

    @property
    def entry_count(self) -> int:
        """Number of names stored (slots that point at a non-empty name)."""
        return sum(1 for word in self._level1 if word >> LENGTH_SHIFT)

    def lookup(self, host: str | bytes) -> LookupResult:
        """Probe the table for an exact, already-normalized host.

        The host must be lowercase ASCII for a match to be possible; no
        normalization happens here.
        """
        if isinstance(host, str):
            host = host.encode("utf-8", "surrogatepass")

        idx = murmur3_32(0, host)
        seed = self._level0[idx & self._mask0]
        if seed > 0:
            idx = murmur3_32(seed, host)
        word = self._level1[idx & self._mask1]
        offset = word & OFFSET_MASK
        length = word >> LENGTH_SHIFT
        return LookupResult(
            include_subdomains=offset < self._include_subdomains_end,
            found=length != 0 and self._names_view[offset:offset + length] == host,
        )

    def memory_bytes(self) -> int:
        """Approximate footprint of the blob and both arrays."""
        return (
            len(self._names)
            + len(self._level0) * self._level0.itemsize
            + len(self._level1) * self._level1.itemsize
        )

    def __repr__(self) -> str:
        return (
            f"PreloadTable(entries={self.entry_count}, "
            f"level0={len(self._level0)}, level1={len(self._level1)}, "
            f"names={len(self._names)}B, max_dots={self._max_dots})"
        )
