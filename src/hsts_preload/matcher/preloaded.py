"""PreloadMatcher: is this host (or a parent domain) HSTS preloaded?

Walk from the full host toward the root, one label at a time, probing
the table at each step:

    "a.b.example.com" -> "b.example.com" -> "example.com" -> "com"

An exact hit on the untouched host counts regardless of the entry's
subdomain flag. A hit reached after dropping any label only counts if
the entry includes subdomains.

Hosts deeper than the deepest table entry are first cut down to
max_dots dots. Those dropped labels could never be part of a match,
but dropping them means only an include-subdomains entry can match
afterwards -- the same "truncated" flag as the suffix walk.
"""

from __future__ import annotations

import ipaddress
import logging
import os
import threading
from pathlib import Path

from hsts_preload.source.entries import load_preload_file
from hsts_preload.table.artifact import load_table
from hsts_preload.table.builder import build_table
from hsts_preload.table.preload_table import PreloadTable

log = logging.getLogger(__name__)

TABLE_ENV_VAR = "HSTS_PRELOAD_TABLE"
BUNDLED_LIST = Path(__file__).resolve().parent.parent / "data" / "preload_list.json"


def to_ascii(host: str) -> str:
    """IDNA-encode host, or return it unchanged if it cannot be encoded."""
    try:
        return host.encode("idna").decode("ascii")
    except UnicodeError:
        return host


def is_ip_literal(host: str) -> bool:
    """True for IPv4, IPv6 and bracketed IPv6 literals."""
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


class PreloadMatcher:
    """Answer preload queries against one PreloadTable.

    Stateless apart from the table reference, so a single instance can
    serve any number of threads.
    """

    __slots__ = ("_table",)

    def __init__(self, table: PreloadTable) -> None:
        self._table = table

    @property
    def table(self) -> PreloadTable:
        return self._table

    def is_preloaded(self, host: str) -> bool:
        """Report whether host is covered by the preload list.

        Case-insensitive, ignores one trailing dot, and never raises:
        empty, malformed and IP-literal hosts are simply not preloaded.
        """
        host = host.removesuffix(".")
        if not host or is_ip_literal(host):
            return False
        host = to_ascii(host)

        truncated = False
        extra = host.count(".") - self._table.max_dots
        if extra > 0:
            for _ in range(extra):
                host = host[host.index(".") + 1:]
            truncated = True

        if not host:
            return False

        host = host.lower()
        while host:
            include_subdomains, found = self._table.lookup(host)
            if found:
                return include_subdomains or not truncated

            dot = host.find(".")
            if dot < 0:
                break
            host = host[dot + 1:]
            truncated = True

        return False


_default_lock = threading.Lock()
_default_matcher: PreloadMatcher | None = None


def _load_default_table() -> PreloadTable:
    artifact = os.environ.get(TABLE_ENV_VAR)
    if artifact:
        log.info("Loading preload table from %s", artifact)
        return load_table(artifact)
    log.info("Building preload table from bundled list %s", BUNDLED_LIST)
    return build_table(load_preload_file(BUNDLED_LIST))


def default_matcher() -> PreloadMatcher:
    """Return the process-wide matcher, building it on first use.

    The table comes from the artifact named by $HSTS_PRELOAD_TABLE, or
    from the list bundled with the package. Construction happens once
    even if several threads race on the first call.
    """
    global _default_matcher
    matcher = _default_matcher
    if matcher is None:
        with _default_lock:
            if _default_matcher is None:
                _default_matcher = PreloadMatcher(_load_default_table())
            matcher = _default_matcher
    return matcher


def is_preloaded(host: str) -> bool:
    """Check host against the default preload table."""
    return default_matcher().is_preloaded(host)
