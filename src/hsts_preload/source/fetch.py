"""Download the preload list from the Chromium source tree.

Gitiles serves raw files base64-encoded when asked for ?format=TEXT,
so the body is decoded before the usual comment stripping and JSON
parse. This runs administratively (see the "generate" CLI command),
never on a request path.
"""

from __future__ import annotations

import base64
import binascii
import logging

import requests

from hsts_preload.source.entries import (
    DomainEntry,
    PreloadListError,
    parse_preload_json,
)

log = logging.getLogger(__name__)

CHROMIUM_PRELOAD_URL = (
    "https://chromium.googlesource.com/chromium/src/net/+/main/http/"
    "transport_security_state_static.json?format=TEXT"
)

DEFAULT_TIMEOUT = 600.0  # seconds; the file is several MB


def fetch_preload_list(
    url: str = CHROMIUM_PRELOAD_URL,
    *,
    session: requests.Session | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> list[DomainEntry]:
    """Fetch and parse the upstream preload list.

    Args:
        url: Location of the base64-encoded list.
        session: requests session to use. A throwaway one is created
            (and closed) when omitted.
        timeout: Request timeout in seconds.

    Raises:
        PreloadListError: on a non-200 response or an undecodable body.
        requests.RequestException: on transport failures.
    """
    own_session = session is None
    sess = session if session is not None else requests.Session()
    try:
        log.info("Fetching preload list from %s", url)
        resp = sess.get(url, timeout=timeout)
        if resp.status_code != 200:
            raise PreloadListError(
                f"Server returned unexpected {resp.status_code} {resp.reason} status"
            )
        body = resp.content
    finally:
        if own_session:
            sess.close()

    try:
        text = base64.b64decode(body, validate=False).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise PreloadListError(f"Preload list body is not base64 text: {exc}") from exc

    entries = parse_preload_json(text)
    log.info("Parsed %d preload entries", len(entries))
    return entries
