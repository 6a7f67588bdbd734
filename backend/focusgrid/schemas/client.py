from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from focusgrid.schemas.common import IDModel, Timestamped


class ClientCreate(BaseModel):
    name: str = Field(min_length=1, max_length=180)
    slug: str | None = Field(default=None, max_length=120)
    subdomain: str | None = Field(default=None, max_length=63)


class ClientUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=180)
    slug: str = Field(min_length=1, max_length=120)
    subdomain: str | None = Field(default=None, max_length=63)


class ClientRead(IDModel, Timestamped):
    name: str
    slug: str
    subdomain: str | None = None


class ClientEnvelope(BaseModel):
    client: ClientRead


class ClientList(BaseModel):
    clients: list[ClientRead]


class ClientFeaturesUpdate(BaseModel):
    features: dict[str, Any]
