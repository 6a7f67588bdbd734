from focusgrid.services.client import ClientService
from focusgrid.services.client_config import ClientConfigService
from focusgrid.services.config_client import ConfigClient
from focusgrid.services.features import FeatureService

__all__ = [
    "ClientService",
    "ClientConfigService",
    "ConfigClient",
    "FeatureService",
]
