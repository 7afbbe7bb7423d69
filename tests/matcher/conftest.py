"""Shared fixtures for matcher tests."""
from __future__ import annotations

import pytest

from hsts_preload.matcher import preloaded
from hsts_preload.matcher.preloaded import TABLE_ENV_VAR, PreloadMatcher
from hsts_preload.source.entries import DomainEntry
from hsts_preload.table.builder import build_table


@pytest.fixture
def scenario_matcher() -> PreloadMatcher:
    return PreloadMatcher(build_table([
        DomainEntry("a.b", include_subdomains=True),
        DomainEntry("x.y", include_subdomains=False),
    ]))


@pytest.fixture
def matcher() -> PreloadMatcher:
    return PreloadMatcher(build_table([
        DomainEntry("dev", include_subdomains=True),
        DomainEntry("tomthorogood.net", include_subdomains=True),
        DomainEntry("example.com", include_subdomains=False),
        DomainEntry("www.example.com", include_subdomains=False),
        DomainEntry("deep.example.org", include_subdomains=True),
        DomainEntry("a.b.example", include_subdomains=False),
        DomainEntry("xn--7xa.example.net", include_subdomains=False),
        DomainEntry("g.co", include_subdomains=False),
        DomainEntry("www.g.co", include_subdomains=False),
    ]))


@pytest.fixture
def fresh_default(monkeypatch):
    """Forget any cached default matcher and ignore $HSTS_PRELOAD_TABLE."""
    monkeypatch.setattr(preloaded, "_default_matcher", None)
    monkeypatch.delenv(TABLE_ENV_VAR, raising=False)
    yield
