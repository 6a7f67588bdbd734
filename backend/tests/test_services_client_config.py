from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from sqlmodel import Session, select

from focusgrid.core.errors import ClientNotFoundError, UpstreamError
from focusgrid.models.client import Client, ClientFeature, FeatureName
from focusgrid.services.client_config import ClientConfigService, merge_features, parse_uuid
from tests.conftest import seed_client  # type: ignore


def test_merge_features_defaults_and_ignores_unknown_rows() -> None:
    client_id = uuid4()
    rows = [
        ClientFeature(client_id=client_id, feature_name="agenda", enabled=False),
        ClientFeature(client_id=client_id, feature_name="retired_module", enabled=False),
    ]
    merged = merge_features(rows)
    assert list(merged) == FeatureName.values()
    assert merged["agenda"] is False
    assert all(merged[name] for name in FeatureName.values() if name != "agenda")


def test_parse_uuid() -> None:
    value = uuid4()
    assert parse_uuid(str(value)) == value
    assert parse_uuid(value) is value
    assert parse_uuid("demo") is None


def test_upsert_feature_keeps_single_row_and_config(db_session: Session) -> None:
    tenant = seed_client(db_session)
    service = ClientConfigService(db_session)

    service.upsert_feature(tenant.id, FeatureName.AGENDA, True, {"maxItems": 10})
    service.upsert_feature(tenant.id, "agenda", False)

    rows = db_session.exec(select(ClientFeature).where(ClientFeature.client_id == tenant.id)).all()
    assert len(rows) == 1
    assert rows[0].enabled is False
    assert rows[0].config == {"maxItems": 10}
    assert rows[0].updated_at is not None


def test_get_client_config_unknown_client(db_session: Session) -> None:
    with pytest.raises(ClientNotFoundError):
        ClientConfigService(db_session).get_client_config(str(uuid4()))


def test_database_failure_is_upstream_not_not_found(unreachable_db) -> None:
    with Session(unreachable_db) as session:
        with pytest.raises(UpstreamError) as excinfo:
            ClientConfigService(session).get_client_config("demo")
    assert excinfo.value.status_code == 500
    assert excinfo.value.details


def test_upsert_feature_updates_row_inserted_concurrently(db_session: Session, monkeypatch) -> None:
    tenant = seed_client(db_session, features={"agenda": True})
    service = ClientConfigService(db_session)
    find_feature = service._find_feature
    lookups: list[str] = []

    def stale_lookup(client_id, feature_name):
        # The first lookup misses the row another writer already committed.
        lookups.append(feature_name)
        return None if len(lookups) == 1 else find_feature(client_id, feature_name)

    monkeypatch.setattr(service, "_find_feature", stale_lookup)
    row = service.upsert_feature(tenant.id, FeatureName.AGENDA, False)

    assert lookups == ["agenda", "agenda"]
    rows = db_session.exec(select(ClientFeature).where(ClientFeature.client_id == tenant.id)).all()
    assert len(rows) == 1
    assert rows[0].id == row.id
    assert rows[0].enabled is False


def test_client_timestamps_are_stored_in_utc(db_session: Session) -> None:
    before = datetime.now(timezone.utc) - timedelta(seconds=1)
    tenant = seed_client(db_session)
    db_session.expire_all()

    stored = db_session.get(Client, tenant.id)
    created_at = stored.created_at
    if created_at.tzinfo is None:
        # SQLite hands the UTC wall time back without an offset.
        created_at = created_at.replace(tzinfo=timezone.utc)
    assert before <= created_at <= datetime.now(timezone.utc) + timedelta(seconds=1)
    assert stored.updated_at is None
