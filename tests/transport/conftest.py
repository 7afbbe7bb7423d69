"""Shared fixtures for transport adapter tests."""
from __future__ import annotations

import pytest
import requests
from requests.adapters import BaseAdapter

from hsts_preload.matcher.preloaded import PreloadMatcher
from hsts_preload.source.entries import DomainEntry
from hsts_preload.table.builder import build_table


class RecordingAdapter(BaseAdapter):
    """Stands in for HTTPAdapter: remembers what it was asked to send."""

    def __init__(self) -> None:
        super().__init__()
        self.sent: list[requests.PreparedRequest] = []
        self.kwargs: list[dict] = []
        self.closed = False

    def send(self, request, **kwargs):
        self.sent.append(request)
        self.kwargs.append(kwargs)
        resp = requests.Response()
        resp.status_code = 204
        resp.url = request.url
        resp.request = request
        return resp

    def close(self):
        self.closed = True


@pytest.fixture
def matcher() -> PreloadMatcher:
    return PreloadMatcher(build_table([
        DomainEntry("a.b", include_subdomains=True),
        DomainEntry("tomthorogood.net", include_subdomains=True),
        DomainEntry("g.co", include_subdomains=False),
        DomainEntry("www.g.co", include_subdomains=False),
        DomainEntry("xn--7xa.google.com", include_subdomains=False),
    ]))


@pytest.fixture
def recorder() -> RecordingAdapter:
    return RecordingAdapter()
