from focusgrid.schemas import client, common, config

__all__ = [
    "client",
    "common",
    "config",
]
