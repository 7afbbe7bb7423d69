"""Persist a built PreloadTable as a JSON data file.

The generated file is what a deployment ships: building the table from
the full upstream list takes a while in pure Python, loading the
arrays back does not.

Format (version 1):
    {
        "format": 1,
        "source": "https://...",          # where the entries came from
        "generated_at": "2026-01-01T00:00:00+00:00",
        "names": "devapp...",             # ASCII blob
        "level0": [0, 3, ...],
        "level1": [50331648, ...],
        "include_subdomains_end": 1234,
        "max_dots": 4
    }
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from hsts_preload.table.preload_table import PreloadTable

log = logging.getLogger(__name__)

FORMAT_VERSION = 1

_REQUIRED = ("names", "level0", "level1", "include_subdomains_end", "max_dots")


class ArtifactError(ValueError):
    """A table artifact is unreadable or from an unsupported format."""


def table_to_dict(table: PreloadTable, *, source: str | None = None) -> dict[str, Any]:
    return {
        "format": FORMAT_VERSION,
        "source": source,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "names": table.names.decode("ascii"),
        "level0": table.level0.tolist(),
        "level1": table.level1.tolist(),
        "include_subdomains_end": table.include_subdomains_end,
        "max_dots": table.max_dots,
    }


def table_from_dict(obj: Any) -> PreloadTable:
    """Rebuild a PreloadTable from a decoded artifact.

    Raises:
        ArtifactError: on a wrong format version, missing keys, or
            arrays that do not form a valid table.
    """
    if not isinstance(obj, dict):
        raise ArtifactError("Table artifact must be a JSON object")
    version = obj.get("format")
    if version != FORMAT_VERSION:
        raise ArtifactError(
            f"Unsupported table format {version!r} (expected {FORMAT_VERSION})"
        )
    missing = [key for key in _REQUIRED if key not in obj]
    if missing:
        raise ArtifactError(f"Table artifact missing keys: {', '.join(missing)}")

    try:
        return PreloadTable(
            names=obj["names"].encode("ascii"),
            level0=obj["level0"],
            level1=obj["level1"],
            include_subdomains_end=int(obj["include_subdomains_end"]),
            max_dots=int(obj["max_dots"]),
        )
    except (TypeError, ValueError, OverflowError, AttributeError) as exc:
        raise ArtifactError(f"Invalid table artifact: {exc}") from exc


def dump_table(
    table: PreloadTable,
    path: str | Path,
    *,
    source: str | None = None,
) -> None:
    """Write table to path as a compact JSON artifact."""
    path = Path(path)
    payload = json.dumps(table_to_dict(table, source=source), separators=(",", ":"))
    path.write_text(payload + "\n", encoding="ascii")
    log.info("Wrote %r to %s (%d bytes)", table, path, len(payload) + 1)


def load_table(path: str | Path) -> PreloadTable:
    """Load a table artifact written by dump_table()."""
    path = Path(path)
    try:
        obj = json.loads(path.read_text(encoding="ascii"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ArtifactError(f"{path} is not a table artifact: {exc}") from exc
    table = table_from_dict(obj)
    log.debug("Loaded %r from %s", table, path)
    return table
