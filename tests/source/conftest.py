"""Shared fixtures for preload list source tests."""
from __future__ import annotations

import base64

import pytest

SAMPLE_LIST = """\
// Copyright header lines are comments.
// So is this one.
{
  "pinsets": [],
  "entries": [
    // Google
    { "name": "google.com", "policy": "google", "include_subdomains": true, "pins": "google" },
    { "name": "g.co", "policy": "google", "mode": "force-https", "pins": "google" },
      // indented comment
    { "name": "tmthrgd.dev", "policy": "bulk-18-weeks", "mode": "force-https", "include_subdomains": true }
  ]
}
"""


@pytest.fixture
def sample_list() -> str:
    return SAMPLE_LIST


@pytest.fixture
def encoded_sample() -> bytes:
    # gitiles wraps the base64 body across lines
    raw = base64.b64encode(SAMPLE_LIST.encode("utf-8"))
    return b"\n".join(raw[i:i + 76] for i in range(0, len(raw), 76))
