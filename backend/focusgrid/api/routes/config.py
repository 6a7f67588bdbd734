from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from focusgrid.api.deps import get_db
from focusgrid.schemas.config import ClientConfig, FeatureCatalog, FeatureToggleRequest, FeatureToggleResponse
from focusgrid.services.client_config import ClientConfigService, resolve_client_id
from focusgrid.services.features import FeatureService, feature_catalog

router = APIRouter(tags=["config"])


@router.get("/config", response_model=ClientConfig)
def get_client_config(
    client_id: str | None = Query(default=None, alias="clientId"),
    session: Session = Depends(get_db),
) -> ClientConfig:
    service = ClientConfigService(session)
    return service.get_client_config(resolve_client_id(client_id))


@router.get("/features", response_model=FeatureCatalog)
def list_features() -> FeatureCatalog:
    return feature_catalog()


@router.post("/features/toggle", response_model=FeatureToggleResponse)
def toggle_feature(
    payload: FeatureToggleRequest,
    session: Session = Depends(get_db),
) -> FeatureToggleResponse:
    service = FeatureService(session)
    return service.toggle_feature(payload.client_id, payload.feature, payload.enabled)
