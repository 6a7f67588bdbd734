from __future__ import annotations

from typing import Any, Mapping

from sqlmodel import Session, select

from focusgrid.core.errors import InvalidFeatureError, ValidationFailedError
from focusgrid.core.logging_setup import logger
from focusgrid.models.client import FEATURE_DESCRIPTIONS, FeatureDefault, FeatureName
from focusgrid.schemas.config import FeatureCatalog, FeatureToggleResponse
from focusgrid.services.client_config import ClientConfigService


def feature_catalog() -> FeatureCatalog:
    return FeatureCatalog(
        available_features=FeatureName.values(),
        feature_descriptions=dict(FEATURE_DESCRIPTIONS),
    )


def validate_feature_name(feature: Any) -> FeatureName:
    valid = FeatureName.values()
    if feature not in valid:
        raise InvalidFeatureError(f"Invalid feature. Valid features: {', '.join(valid)}", valid)
    return FeatureName(feature)


class FeatureService:
    def __init__(self, session: Session) -> None:
        self.session = session
        self.configs = ClientConfigService(session)

    def toggle_feature(self, client_id: Any, feature: Any, enabled: Any) -> FeatureToggleResponse:
        if not isinstance(client_id, str) or not client_id.strip() or not feature or not isinstance(enabled, bool):
            raise ValidationFailedError("clientId, feature, and enabled (boolean) are required")
        feature_name = validate_feature_name(feature)

        client = self.configs.get_client(client_id)
        self.configs.upsert_feature(client.id, feature_name, enabled)
        logger.info("Feature %s %s for client %s", feature_name.value, "enabled" if enabled else "disabled", client.id)

        config = self.configs.get_client_config(client.id)
        return FeatureToggleResponse(
            message=f"Feature {feature_name.value} {'enabled' if enabled else 'disabled'} for client {client_id}",
            config=config,
        )

    def get_feature_defaults(self) -> dict[str, bool]:
        with self.configs.database_errors("fetching feature defaults"):
            rows = self.session.exec(select(FeatureDefault)).all()
        stored = {row.feature_name: bool(row.enabled) for row in rows}
        return {name: stored.get(name, True) for name in FeatureName.values()}

    def update_feature_defaults(self, updates: Mapping[str, Any]) -> dict[str, bool]:
        valid = FeatureName.values()
        for key in updates:
            if key not in valid:
                raise InvalidFeatureError(f"Invalid feature: {key}", valid)

        with self.configs.database_errors("updating feature defaults"):
            for key, value in updates.items():
                row = self.session.get(FeatureDefault, key)
                if row is None:
                    row = FeatureDefault(feature_name=key)
                row.enabled = bool(value)
                self.session.add(row)
            self.session.commit()
        return self.get_feature_defaults()
