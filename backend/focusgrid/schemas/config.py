from __future__ import annotations

from typing import Any

from focusgrid.schemas.common import CamelModel


class Branding(CamelModel):
    primary_color: str


class ClientConfig(CamelModel):
    client_id: str
    name: str
    slug: str
    features: dict[str, bool]
    branding: Branding


class FeatureToggleRequest(CamelModel):
    # Validated by FeatureService.toggle_feature.
    client_id: Any = None
    feature: Any = None
    enabled: Any = None


class FeatureToggleResponse(CamelModel):
    message: str
    config: ClientConfig


class FeatureCatalog(CamelModel):
    available_features: list[str]
    feature_descriptions: dict[str, str]
