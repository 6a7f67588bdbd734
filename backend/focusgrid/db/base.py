# noqa: F401 to ensure models are imported for metadata
from focusgrid.models.client import Client, ClientFeature, FeatureDefault

__all__ = [
    "Client",
    "ClientFeature",
    "FeatureDefault",
]
