from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Iterator
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from focusgrid.core.config import settings
from focusgrid.core.errors import ClientIdRequiredError, ClientNotFoundError, UpstreamError
from focusgrid.core.logging_setup import logger
from focusgrid.models.base import utcnow
from focusgrid.models.client import Client, ClientFeature, FeatureName
from focusgrid.schemas.config import Branding, ClientConfig


def resolve_client_id(query_client_id: str | None = None, default: str | None = None) -> str:
    """
    Pick the tenant a request refers to.

    The ``clientId`` query parameter wins over an explicit default, which wins
    over the ``CLIENT_ID`` setting. Blank values are ignored.
    """
    for candidate in (query_client_id, default, settings.resolved_client_id()):
        value = (candidate or "").strip()
        if value:
            return value
    raise ClientIdRequiredError()


def parse_uuid(value: str | UUID) -> UUID | None:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value).strip())
    except (ValueError, TypeError):
        return None


def merge_features(rows: Iterable[ClientFeature]) -> dict[str, bool]:
    """Stored overrides win; every known feature missing a row defaults to enabled."""
    stored = {row.feature_name: bool(row.enabled) for row in rows}
    return {name: stored.get(name, True) for name in FeatureName.values()}


class ClientConfigService:
    def __init__(self, session: Session) -> None:
        self.session = session

    @contextmanager
    def database_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Database error while %s: %s", action, exc)
            raise UpstreamError(str(exc)) from exc

    def find_client(self, slug_or_id: str | UUID) -> Client | None:
        """Look a client up by slug, or by id when the identifier is a UUID."""
        client_uuid = parse_uuid(slug_or_id)
        statement = select(Client)
        if client_uuid is not None:
            statement = statement.where(or_(Client.id == client_uuid, Client.slug == str(slug_or_id).strip()))
        else:
            statement = statement.where(Client.slug == str(slug_or_id).strip())
        with self.database_errors("fetching client"):
            return self.session.exec(statement.limit(1)).first()

    def get_client(self, slug_or_id: str | UUID) -> Client:
        client = self.find_client(slug_or_id)
        if client is None:
            raise ClientNotFoundError(str(slug_or_id))
        return client

    def get_client_features(self, client_id: UUID) -> list[ClientFeature]:
        statement = select(ClientFeature).where(ClientFeature.client_id == client_id)
        with self.database_errors("fetching client features"):
            return list(self.session.exec(statement).all())

    def _find_feature(self, client_id: UUID, feature_name: str) -> ClientFeature | None:
        statement = (
            select(ClientFeature)
            .where(ClientFeature.client_id == client_id)
            .where(ClientFeature.feature_name == feature_name)
        )
        return self.session.exec(statement).first()

    @staticmethod
    def _apply_feature(row: ClientFeature, enabled: bool, config: dict | None) -> None:
        row.enabled = enabled
        if config is not None:
            row.config = config
        row.updated_at = utcnow()

    def upsert_feature(
        self,
        client_id: UUID,
        feature_name: FeatureName | str,
        enabled: bool,
        config: dict | None = None,
        *,
        commit: bool = True,
    ) -> ClientFeature:
        name = FeatureName(feature_name).value
        with self.database_errors("updating client feature"):
            row = self._find_feature(client_id, name)
            if row is None:
                try:
                    with self.session.begin_nested():
                        row = ClientFeature(
                            client_id=client_id,
                            feature_name=name,
                            enabled=enabled,
                            config=config or {},
                        )
                        self.session.add(row)
                except IntegrityError:
                    # Another writer inserted the same (client, feature) first.
                    logger.info("Feature %s for client %s inserted concurrently, updating", name, client_id)
                    row = self._find_feature(client_id, name)
                    if row is None:
                        raise
                    self._apply_feature(row, enabled, config)
            else:
                self._apply_feature(row, enabled, config)
            self.session.add(row)
            if commit:
                self.session.commit()
                self.session.refresh(row)
        return row

    def build_config(self, client: Client, rows: Iterable[ClientFeature]) -> ClientConfig:
        return ClientConfig(
            client_id=str(client.id),
            name=client.name,
            slug=client.slug,
            features=merge_features(rows),
            branding=Branding(primary_color=settings.default_branding_color),
        )

    def get_client_config(self, slug_or_id: str | UUID) -> ClientConfig:
        client = self.get_client(slug_or_id)
        return self.build_config(client, self.get_client_features(client.id))
