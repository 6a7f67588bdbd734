from focusgrid.models.client import FeatureName
from focusgrid.services.fallback import (
    DEFAULT_FALLBACK_CLIENT_ID,
    FALLBACK_CLIENTS,
    get_default_fallback_config,
    get_fallback_config,
)


def test_every_fallback_config_has_all_features() -> None:
    for client_id, config in FALLBACK_CLIENTS.items():
        assert config.client_id == client_id
        assert list(config.features) == FeatureName.values()


def test_fallback_lookup_returns_copies() -> None:
    config = get_fallback_config(DEFAULT_FALLBACK_CLIENT_ID)
    config.features["agenda"] = False

    assert FALLBACK_CLIENTS[DEFAULT_FALLBACK_CLIENT_ID].features["agenda"] is True
    assert get_default_fallback_config().features["agenda"] is True


def test_unknown_fallback_client() -> None:
    assert get_fallback_config("unknown") is None
    assert get_fallback_config(None) is None
