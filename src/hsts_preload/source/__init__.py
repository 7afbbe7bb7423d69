"""Preload list input: entry model, document parsing, upstream fetch."""

from hsts_preload.source.entries import (
    FORCE_HTTPS,
    DomainEntry,
    PreloadListError,
    load_preload_file,
    parse_preload_json,
    strip_comment_lines,
)
from hsts_preload.source.fetch import CHROMIUM_PRELOAD_URL, fetch_preload_list

__all__ = [
    "CHROMIUM_PRELOAD_URL",
    "FORCE_HTTPS",
    "DomainEntry",
    "PreloadListError",
    "fetch_preload_list",
    "load_preload_file",
    "parse_preload_json",
    "strip_comment_lines",
]
