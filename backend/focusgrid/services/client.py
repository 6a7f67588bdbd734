from __future__ import annotations

import re
from typing import Any, Iterable, Mapping
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from focusgrid.core.errors import ClientNotFoundError, ConflictError, ValidationFailedError
from focusgrid.core.logging_setup import logger
from focusgrid.models.base import utcnow
from focusgrid.models.client import Client, ClientFeature, FeatureName
from focusgrid.schemas.client import ClientCreate, ClientUpdate
from focusgrid.services.client_config import ClientConfigService
from focusgrid.services.features import FeatureService


def generate_slug(text: str) -> str:
    """URL-friendly slug: lower case, runs of other characters become one hyphen."""
    slug = re.sub(r"[^a-z0-9]+", "-", (text or "").lower())
    return slug.strip("-")


def generate_subdomain(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "", (name or "").lower())[:15]


class ClientService:
    def __init__(self, session: Session) -> None:
        self.session = session
        self.configs = ClientConfigService(session)

    def list_clients(self) -> Iterable[Client]:
        statement = select(Client).order_by(Client.created_at.desc())
        with self.configs.database_errors("listing clients"):
            return self.session.exec(statement).all()

    def create_client(self, payload: ClientCreate) -> Client:
        name = payload.name.strip()
        slug = generate_slug(payload.slug or name)
        if not name or not slug:
            raise ValidationFailedError("Name and slug are required")
        subdomain = (payload.subdomain or "").strip() or generate_subdomain(name)

        if self.configs.find_client(slug) is not None:
            raise ConflictError("Client with this slug already exists")

        defaults = FeatureService(self.session).get_feature_defaults()
        with self.configs.database_errors("creating client"):
            client = Client(name=name, slug=slug, subdomain=subdomain)
            self.session.add(client)
            try:
                self.session.flush()
            except IntegrityError as exc:
                self.session.rollback()
                logger.info("Client slug %s taken concurrently", slug)
                raise ConflictError("Client with this slug already exists") from exc
            for feature_name, enabled in defaults.items():
                self.configs.upsert_feature(client.id, feature_name, enabled, commit=False)
            self.session.commit()
            self.session.refresh(client)

        logger.info("Client created: id=%s slug=%s", client.id, client.slug)
        return client

    def update_client(self, client_id: str | UUID, payload: ClientUpdate) -> Client:
        client = self.configs.get_client(client_id)
        slug = payload.slug.strip()
        if not slug or not payload.name.strip():
            raise ValidationFailedError("Name and slug are required")
        if slug != client.slug:
            conflict = self.configs.find_client(slug)
            if conflict is not None and conflict.id != client.id:
                raise ConflictError("Client with this slug already exists")

        with self.configs.database_errors("updating client"):
            client.name = payload.name.strip()
            client.slug = slug
            client.subdomain = (payload.subdomain or "").strip() or None
            client.updated_at = utcnow()
            self.session.add(client)
            self.session.commit()
            self.session.refresh(client)
        return client

    def update_client_features(self, client_id: str | UUID, features: Mapping[str, Any]) -> None:
        client = self.configs.get_client(client_id)
        known = set(FeatureName.values())
        with self.configs.database_errors("updating client features"):
            for feature_name, enabled in features.items():
                if feature_name in known:
                    self.configs.upsert_feature(client.id, feature_name, bool(enabled), commit=False)
            self.session.commit()

    def delete_client(self, client_id: str | UUID) -> None:
        client = self.configs.find_client(client_id)
        if client is None:
            raise ClientNotFoundError(str(client_id))

        with self.configs.database_errors("deleting client"):
            rows = self.session.exec(select(ClientFeature).where(ClientFeature.client_id == client.id)).all()
            for row in rows:
                self.session.delete(row)
            self.session.flush()
            self.session.delete(client)
            self.session.commit()
        logger.info("Client deleted: id=%s", client.id)
