"""Preload list entries and the Chromium JSON document format.

The upstream list (transport_security_state_static.json) is JSON with
"//" line comments sprinkled through it. Only three fields of each
entry matter here:

    {
        "name": "example.com",
        "include_subdomains": true,
        "mode": "force-https"
    }

Entries without mode "force-https" (pin-only entries, for example)
are parsed but later dropped by the table builder.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

FORCE_HTTPS = "force-https"


class PreloadListError(ValueError):
    """The preload list could not be fetched or parsed."""


@dataclass(frozen=True, slots=True)
class DomainEntry:
    """One row of the preload list."""
    name: str
    include_subdomains: bool = False
    mode: str = FORCE_HTTPS

    @property
    def enforces_https(self) -> bool:
        return self.mode == FORCE_HTTPS


def strip_comment_lines(text: str) -> str:
    """Drop every line that starts with "//" once leading whitespace is removed.

    Trailing comments after JSON on the same line are not handled; the
    upstream file never uses them.
    """
    return "\n".join(
        line for line in text.splitlines()
        if not line.strip().startswith("//")
    )


def _entry_from_obj(obj: Any, position: int) -> DomainEntry:
    if not isinstance(obj, dict):
        raise PreloadListError(f"Entry {position} is not an object: {obj!r}")
    name = obj.get("name")
    if not isinstance(name, str) or not name:
        raise PreloadListError(f"Entry {position} has no usable name: {obj!r}")
    mode = obj.get("mode", "")
    if not isinstance(mode, str):
        raise PreloadListError(f"Entry {position} ({name}) has a non-string mode")
    return DomainEntry(
        name=name,
        include_subdomains=bool(obj.get("include_subdomains", False)),
        mode=mode,
    )


def parse_preload_json(text: str) -> list[DomainEntry]:
    """Parse a preload list document into entries, in file order.

    Raises:
        PreloadListError: if the document is not JSON, has no "entries"
            array, or an entry lacks a name.
    """
    try:
        doc = json.loads(strip_comment_lines(text))
    except json.JSONDecodeError as exc:
        raise PreloadListError(f"Preload list is not valid JSON: {exc}") from exc

    if not isinstance(doc, dict) or not isinstance(doc.get("entries"), list):
        raise PreloadListError("Preload list has no 'entries' array")

    return [_entry_from_obj(obj, i) for i, obj in enumerate(doc["entries"])]


def load_preload_file(path: str | Path) -> list[DomainEntry]:
    """Read a plain (not base64) preload list from disk."""
    return parse_preload_json(Path(path).read_text(encoding="utf-8"))
