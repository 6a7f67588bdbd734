from enum import Enum
from typing import List
from uuid import UUID

from sqlalchemy import JSON, UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from focusgrid.models.base import TimestampedModel, UUIDModel


class FeatureName(str, Enum):
    LONG_TERM_GOALS = "long_term_goals"
    ACTION_PLAN = "action_plan"
    BLOCKERS_ISSUES = "blockers_issues"
    AGENDA = "agenda"
    GOALS_PROGRESS = "goals_progress"

    @classmethod
    def values(cls) -> list[str]:
        return [item.value for item in cls]


FEATURE_DESCRIPTIONS: dict[str, str] = {
    FeatureName.LONG_TERM_GOALS.value: "Long-Term Goals module with accordion functionality",
    FeatureName.ACTION_PLAN.value: "Action Plan module with status tracking",
    FeatureName.BLOCKERS_ISSUES.value: "Blockers & Issues module for tracking impediments",
    FeatureName.AGENDA.value: "Agenda module for meeting items",
    FeatureName.GOALS_PROGRESS.value: "Goals progress module with completion tracking",
}


class Client(UUIDModel, TimestampedModel, table=True):
    __tablename__ = "clients"

    name: str = Field(index=True, max_length=180)
    slug: str = Field(unique=True, index=True, max_length=120)
    subdomain: str | None = Field(default=None, max_length=63)

    features: List["ClientFeature"] = Relationship(back_populates="client")


class ClientFeature(UUIDModel, TimestampedModel, table=True):
    __tablename__ = "client_features"
    __table_args__ = (UniqueConstraint("client_id", "feature_name", name="uq_client_feature"),)

    client_id: UUID = Field(foreign_key="clients.id", index=True)
    feature_name: str = Field(max_length=64)
    enabled: bool = Field(default=True)
    config: dict | None = Field(default_factory=dict, sa_type=JSON)

    client: Client = Relationship(back_populates="features")


class FeatureDefault(SQLModel, table=True):
    __tablename__ = "feature_defaults"

    feature_name: str = Field(primary_key=True, max_length=64)
    enabled: bool = Field(default=True)
