"""Pre-baked tenant configs served when the config API or its database is down."""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from focusgrid.schemas.config import Branding, ClientConfig

DEMO_CLIENT_ID = "8323e82d-075a-496d-8861-a86d862a67bc"
BLUE_LABEL_CLIENT_ID = "fbf03fbc-bf81-462b-a88f-668dfcb09acc"
ERC_CLIENT_ID = "360e6a09-c7e2-447e-8dbc-cebae72f1ff2"

DEFAULT_FALLBACK_CLIENT_ID = DEMO_CLIENT_ID


def _config(client_id: str, name: str, slug: str, color: str, **overrides: bool) -> ClientConfig:
    features = {
        "long_term_goals": True,
        "action_plan": True,
        "blockers_issues": True,
        "agenda": True,
        "goals_progress": True,
    }
    features.update(overrides)
    return ClientConfig(
        client_id=client_id,
        name=name,
        slug=slug,
        features=features,
        branding=Branding(primary_color=color),
    )


FALLBACK_CLIENTS: Mapping[str, ClientConfig] = MappingProxyType(
    {
        DEMO_CLIENT_ID: _config(DEMO_CLIENT_ID, "Demo Client", "demo", "#346.8 77.2% 49.8%"),
        BLUE_LABEL_CLIENT_ID: _config(
            BLUE_LABEL_CLIENT_ID,
            "Blue Label Packaging",
            "blue-label-packaging",
            "#1E40AF",
            blockers_issues=False,
        ),
        ERC_CLIENT_ID: _config(ERC_CLIENT_ID, "ERC", "erc", "#059669", long_term_goals=False),
    }
)

# Tenant subdomains on the shared dashboard domain.
SUBDOMAIN_CLIENT_IDS: Mapping[str, str] = MappingProxyType(
    {
        "demo": DEMO_CLIENT_ID,
        "bluelabelpackaging": BLUE_LABEL_CLIENT_ID,
        "blue-label-packaging": BLUE_LABEL_CLIENT_ID,
        "erc": ERC_CLIENT_ID,
    }
)


def get_fallback_config(client_id: str | None) -> ClientConfig | None:
    config = FALLBACK_CLIENTS.get((client_id or "").strip())
    return config.model_copy(deep=True) if config is not None else None


def get_default_fallback_config() -> ClientConfig:
    return FALLBACK_CLIENTS[DEFAULT_FALLBACK_CLIENT_ID].model_copy(deep=True)
