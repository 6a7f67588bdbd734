from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from focusgrid.api.deps import get_db
from focusgrid.core.errors import UpstreamError
from focusgrid.core.logging_setup import logger
from focusgrid.db.session import ping
from focusgrid.models.client import FeatureName
from focusgrid.schemas.common import SuccessResponse
from focusgrid.services.client import ClientService
from focusgrid.services.features import FeatureService

router = APIRouter(tags=["admin"])


@router.get("/admin/feature-defaults", response_model=dict[str, bool])
def get_feature_defaults(session: Session = Depends(get_db)) -> dict[str, bool]:
    return FeatureService(session).get_feature_defaults()


@router.post("/admin/feature-defaults", response_model=SuccessResponse)
def update_feature_defaults(
    updates: dict[str, Any] = Body(...),
    session: Session = Depends(get_db),
) -> SuccessResponse:
    FeatureService(session).update_feature_defaults(updates)
    return SuccessResponse()


@router.get("/admin/health")
def system_health(session: Session = Depends(get_db)) -> dict[str, Any]:
    checked_at = datetime.now(timezone.utc).isoformat()
    try:
        ping(session)
        database_status = "connected"
    except SQLAlchemyError as exc:
        logger.warning("Health check: database unreachable: %s", exc)
        database_status = "error"

    return {
        "database": {"status": database_status, "lastChecked": checked_at},
        "overall": "healthy" if database_status == "connected" else "warning",
    }


@router.get("/database/test")
def database_test(session: Session = Depends(get_db)) -> dict[str, Any]:
    try:
        current_time = ping(session)
    except SQLAlchemyError as exc:
        raise UpstreamError(str(exc)) from exc

    clients = list(ClientService(session).list_clients())
    return {
        "message": "Database connection successful",
        "connectionTime": str(current_time),
        "clientsCount": len(clients),
        "availableFeatures": FeatureName.values(),
    }
