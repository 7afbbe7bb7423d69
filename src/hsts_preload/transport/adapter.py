"""HSTSAdapter: upgrade plain-http requests to preloaded hosts.

A requests transport adapter that wraps another adapter. Before
delegating, it rewrites

    http://example.dev/path      -> https://example.dev/path
    http://example.dev:80/path   -> https://example.dev/path

when the hostname is preloaded. Anything else (https already, a
non-default port, a host not on the list, non-http schemes) passes
through untouched.

The rewrite happens on a copy of the PreparedRequest. Callers are free
to keep and resend the original.

Usage:
    session = requests.Session()
    session.mount("http://", HSTSAdapter())
"""

from __future__ import annotations

import logging
from urllib.parse import unquote, urlsplit, urlunsplit

import requests
from requests.adapters import BaseAdapter, HTTPAdapter

from hsts_preload.matcher.preloaded import PreloadMatcher, default_matcher

log = logging.getLogger(__name__)


def _strip_port(netloc: str) -> str:
    """Drop ":port" from a netloc, keeping any userinfo."""
    userinfo, at, hostport = netloc.rpartition("@")
    colon = hostport.rfind(":")
    if colon > hostport.rfind("]"):
        hostport = hostport[:colon]
    return f"{userinfo}{at}{hostport}"


def upgrade_url(url: str, matcher: PreloadMatcher | None = None) -> str | None:
    """Return the https form of url, or None if it must not be upgraded."""
    parts = urlsplit(url)
    if parts.scheme != "http" or not parts.hostname:
        return None
    try:
        port = parts.port
    except ValueError:
        return None
    if port is not None and port != 80:
        return None

    matcher = matcher if matcher is not None else default_matcher()
    if not matcher.is_preloaded(unquote(parts.hostname)):
        return None

    return urlunsplit(parts._replace(scheme="https", netloc=_strip_port(parts.netloc)))


class HSTSAdapter(BaseAdapter):
    """Transport adapter that upgrades preloaded hosts to https.

    Args:
        base: Adapter that actually sends requests (default HTTPAdapter()).
        matcher: Preload matcher to consult (default: the process-wide one).
    """

    def __init__(
        self,
        base: BaseAdapter | None = None,
        matcher: PreloadMatcher | None = None,
    ) -> None:
        super().__init__()
        self._base = base if base is not None else HTTPAdapter()
        self._matcher = matcher

    @property
    def base(self) -> BaseAdapter:
        return self._base

    def send(self, request: requests.PreparedRequest, **kwargs) -> requests.Response:
        upgraded = upgrade_url(request.url, self._matcher)
        if upgraded is not None:
            log.debug("Upgrading %s to %s", request.url, upgraded)
            request = request.copy()
            request.url = upgraded
        return self._base.send(request, **kwargs)

    def close(self) -> None:
        self._base.close()


def preload_session(matcher: PreloadMatcher | None = None) -> requests.Session:
    """A requests.Session with HSTSAdapter mounted for http:// URLs."""
    session = requests.Session()
    session.mount("http://", HSTSAdapter(matcher=matcher))
    return session
