from . import admin, clients, config, health

__all__ = [
    "admin",
    "clients",
    "config",
    "health",
]
