"""Shared fixtures for table tests."""
from __future__ import annotations

import random

import pytest

from hsts_preload.source.entries import DomainEntry
from hsts_preload.table.builder import build_table

SEED = 42

TLDS = ["com", "net", "org", "dev", "io", "co.uk", "app"]


def generate_names(count: int, seed: int = SEED) -> list[str]:
    """Generate count distinct, plausible-looking domain names."""
    rng = random.Random(seed)
    letters = "abcdefghijklmnopqrstuvwxyz0123456789-"
    names: set[str] = set()
    while len(names) < count:
        label = "".join(rng.choice(letters) for _ in range(rng.randint(3, 14)))
        label = label.strip("-") or "x"
        prefix = rng.choice(["", "", "", "www.", "api.", "a.b."])
        names.add(f"{prefix}{label}.{rng.choice(TLDS)}")
    return sorted(names)


@pytest.fixture
def scenario_entries() -> list[DomainEntry]:
    return [
        DomainEntry("a.b", include_subdomains=True),
        DomainEntry("x.y", include_subdomains=False),
    ]


@pytest.fixture
def scenario_table(scenario_entries):
    return build_table(scenario_entries)


@pytest.fixture
def mixed_entries() -> list[DomainEntry]:
    return [
        DomainEntry("zeta.example", include_subdomains=False),
        DomainEntry("alpha.example", include_subdomains=True),
        DomainEntry("dev", include_subdomains=True),
        DomainEntry("www.beta.example", include_subdomains=False),
        DomainEntry("pinned.example", include_subdomains=True, mode=""),
        DomainEntry("Mixed.Example", include_subdomains=False),
    ]


@pytest.fixture
def large_names() -> list[str]:
    return generate_names(5000)
