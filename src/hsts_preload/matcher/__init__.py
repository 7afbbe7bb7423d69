"""Hostname matching against the preload table."""

from hsts_preload.matcher.preloaded import (
    TABLE_ENV_VAR,
    PreloadMatcher,
    default_matcher,
    is_ip_literal,
    is_preloaded,
    to_ascii,
)

__all__ = [
    "TABLE_ENV_VAR",
    "PreloadMatcher",
    "default_matcher",
    "is_ip_literal",
    "is_preloaded",
    "to_ascii",
]
