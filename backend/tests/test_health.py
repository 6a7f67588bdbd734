from fastapi import status
from sqlmodel import Session

from focusgrid.models.client import FeatureName
from tests.conftest import api, seed_client  # type: ignore


def test_liveness(client) -> None:
    assert client.get("/health/live").json() == {"status": "ok"}
    assert client.get("/health/ready").json() == {"status": "ready"}


def test_admin_health_and_database_test(client, db_session: Session) -> None:
    seed_client(db_session)

    health = client.get(api("/admin/health")).json()
    assert health["database"]["status"] == "connected"
    assert health["overall"] == "healthy"

    db_check = client.get(api("/database/test"))
    assert db_check.status_code == status.HTTP_200_OK
    assert db_check.json()["clientsCount"] == 1
    assert db_check.json()["availableFeatures"] == FeatureName.values()


def test_health_during_outage(outage_client) -> None:
    health = outage_client.get(api("/admin/health")).json()
    assert health["database"]["status"] == "error"
    assert health["overall"] == "warning"

    db_check = outage_client.get(api("/database/test"))
    assert db_check.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert db_check.json()["error"] == "Internal server error"
