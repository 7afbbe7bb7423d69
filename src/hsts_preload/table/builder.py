"""Offline construction of the PreloadTable.

Uses the "hash, displace, and compress" scheme (Belazzougui, Botelho &
Dietzfelbinger, ESA 2009) with a single displacement seed per bucket:

    1. Hash every key with seed 0 into one of ~n/4 first-level buckets.
    2. Visit buckets largest first. Big buckets are the hardest to
       place, so they claim level1 slots before the space fills up.
    3. For each bucket try seeds 0, 1, 2, ... until hashing every key
       in the bucket with that seed lands on free, distinct level1
       slots. Record the seed in level0.

The seed has to fit in 16 bits. If none does, the build fails -- there
is no partial table. The same goes for names that do not fit the
24-bit offset / 8-bit length packing.

Build order is fully deterministic: the same sorted key list always
yields byte-identical level0/level1 arrays.
"""

from __future__ import annotations

import array
import logging
from collections.abc import Iterable, Sequence

from hsts_preload.hashing.murmur import murmur3_32
from hsts_preload.source.entries import DomainEntry
from hsts_preload.table.preload_table import LENGTH_SHIFT, OFFSET_MASK, PreloadTable

log = logging.getLogger(__name__)

MAX_SEED = 0xFFFF
MAX_NAME_LENGTH = 0xFF
UNUSED_SLOT = -1


class TableBuildError(RuntimeError):
    """The table cannot be built from the given input."""


def next_pow2(n: int) -> int:
    """Smallest power of two >= n (1 for n <= 1)."""
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def pack_name(offset: int, length: int) -> int:
    """Pack a blob offset and name length into one 32-bit word."""
    if not (0 <= offset <= OFFSET_MASK):
        raise TableBuildError(f"Name offset {offset} does not fit in 24 bits")
    if not (0 <= length <= MAX_NAME_LENGTH):
        raise TableBuildError(f"Name length {length} does not fit in 8 bits")
    return offset | (length << LENGTH_SHIFT)


def build_displacement(keys: Sequence[bytes]) -> tuple[array.array, list[int]]:
    """Find a displacement seed for every bucket.

    Returns:
        (level0, slots): level0 is an array('H') of seeds, one per
        bucket. slots has one element per level1 slot holding the index
        into keys placed there, or UNUSED_SLOT.

    Raises:
        TableBuildError: on duplicate keys, or when some bucket has no
            collision-free seed below 2**16.
    """
    if len(set(keys)) != len(keys):
        raise TableBuildError("Duplicate keys can never be placed")

    level0 = array.array("H", [0]) * next_pow2(len(keys) // 4)
    mask0 = len(level0) - 1
    slots = [UNUSED_SLOT] * next_pow2(len(keys))
    mask1 = len(slots) - 1

    sparse: list[list[int]] = [[] for _ in range(len(level0))]
    for i, key in enumerate(keys):
        sparse[murmur3_32(0, key) & mask0].append(i)

    # sorted() is stable, so equal-size buckets keep bucket-number order
    buckets = sorted(
        ((n, members) for n, members in enumerate(sparse) if members),
        key=lambda b: len(b[1]),
        reverse=True,
    )

    occupied = [False] * len(slots)
    for n, members in buckets:
        for seed in range(MAX_SEED + 1):
            claimed: list[int] = []
            for i in members:
                slot = murmur3_32(seed, keys[i]) & mask1
                if occupied[slot]:
                    break
                occupied[slot] = True
                claimed.append(slot)
            else:
                for slot, i in zip(claimed, members):
                    slots[slot] = i
                level0[n] = seed
                break
            # Collision: release this trial's slots and try the next seed
            for slot in claimed:
                occupied[slot] = False
        else:
            raise TableBuildError(
                f"Unable to find a 16-bit seed for bucket {n} "
                f"({len(members)} keys, {len(slots)} slots)"
            )

    return level0, slots


def _sort_key(entry: DomainEntry) -> tuple[bool, str]:
    return (not entry.include_subdomains, entry.name)


def build_table(entries: Iterable[DomainEntry]) -> PreloadTable:
    """Build a PreloadTable from preload list entries.

    Only "force-https" entries are kept. Names are lowercased and
    ordered include-subdomains first, then by name, so that one offset
    boundary separates the two kinds. If a name appears twice, the copy
    that sorts first (the include-subdomains one, if any) wins.

    Raises:
        TableBuildError: for non-ASCII names, names longer than 255
            bytes, a blob of 16 MiB or more, or an unplaceable bucket.
    """
    kept = sorted(
        (
            DomainEntry(e.name.lower(), e.include_subdomains, e.mode)
            for e in entries
            if e.enforces_https
        ),
        key=_sort_key,
    )

    seen: set[str] = set()
    keys: list[bytes] = []
    packed: list[int] = []
    offset = 0
    include_subdomains_end = 0
    max_dots = 0
    for entry in kept:
        if entry.name in seen:
            log.debug("Dropping duplicate entry %s", entry.name)
            continue
        seen.add(entry.name)
        try:
            key = entry.name.encode("ascii")
        except UnicodeEncodeError:
            raise TableBuildError(f"Name {entry.name!r} is not ASCII") from None

        packed.append(pack_name(offset, len(key)))
        keys.append(key)
        offset += len(key)
        if entry.include_subdomains:
            include_subdomains_end = offset
        max_dots = max(max_dots, entry.name.count("."))

    level0, slots = build_displacement(keys)
    level1 = [0 if i == UNUSED_SLOT else packed[i] for i in slots]

    log.info(
        "Built preload table: %d names, %d buckets, %d slots, max seed %d, max dots %d",
        len(keys), len(level0), len(level1), max(level0, default=0), max_dots,
    )
    return PreloadTable(
        names=b"".join(keys),
        level0=level0,
        level1=level1,
        include_subdomains_end=include_subdomains_end,
        max_dots=max_dots,
    )
