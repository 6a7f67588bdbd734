"""create clients, client_features and feature_defaults

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "clients",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("name", sa.String(length=180), nullable=False),
        sa.Column("slug", sa.String(length=120), nullable=False),
        sa.Column("subdomain", sa.String(length=63), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_clients_id", "clients", ["id"], unique=False)
    op.create_index("ix_clients_name", "clients", ["name"], unique=False)
    op.create_index("ix_clients_slug", "clients", ["slug"], unique=True)

    op.create_table(
        "client_features",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("client_id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("feature_name", sa.String(length=64), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("config", sa.JSON(), nullable=True),
        sa.ForeignKeyConstraint(["client_id"], ["clients.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("client_id", "feature_name", name="uq_client_feature"),
    )
    op.create_index("ix_client_features_id", "client_features", ["id"], unique=False)
    op.create_index("ix_client_features_client_id", "client_features", ["client_id"], unique=False)

    op.create_table(
        "feature_defaults",
        sa.Column("feature_name", sa.String(length=64), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.PrimaryKeyConstraint("feature_name"),
    )


def downgrade() -> None:
    op.drop_table("feature_defaults")
    op.drop_index("ix_client_features_client_id", table_name="client_features")
    op.drop_index("ix_client_features_id", table_name="client_features")
    op.drop_table("client_features")
    op.drop_index("ix_clients_slug", table_name="clients")
    op.drop_index("ix_clients_name", table_name="clients")
    op.drop_index("ix_clients_id", table_name="clients")
    op.drop_table("clients")
