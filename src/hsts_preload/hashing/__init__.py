"""Seeded 32-bit string hashing shared by the table builder and lookups."""

from hsts_preload.hashing.murmur import murmur3_32

__all__ = [
    "murmur3_32",
]
