"""requests transport adapter that upgrades preloaded hosts to https."""

from hsts_preload.transport.adapter import HSTSAdapter, preload_session, upgrade_url

__all__ = [
    "HSTSAdapter",
    "preload_session",
    "upgrade_url",
]
