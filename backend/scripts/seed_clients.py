"""
Seed the tenants known to the fallback table so live and fallback configs agree.

Usage (package installed, DATABASE_URL in the environment or .env):
    python scripts/seed_clients.py
"""
from uuid import UUID

from sqlmodel import Session

from focusgrid.db.session import engine, init_db
from focusgrid.models.client import Client
from focusgrid.services.client_config import ClientConfigService
from focusgrid.services.fallback import FALLBACK_CLIENTS

init_db()

with Session(engine) as s:
    service = ClientConfigService(s)
    for client_id, config in FALLBACK_CLIENTS.items():
        client = s.get(Client, UUID(client_id))
        if client is None:
            client = Client(id=UUID(client_id), name=config.name, slug=config.slug)
            s.add(client)
            s.flush()
        for feature_name, enabled in config.features.items():
            service.upsert_feature(client.id, feature_name, enabled, commit=False)
        s.commit()
        print(f"ID: {client.id} | Slug: {client.slug} | Features: {config.features}")
