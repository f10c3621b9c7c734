# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Table definitions using SQLAlchemy Core."""

from sqlalchemy import JSON, Column, DateTime, Index, MetaData, String, Table

metadata = MetaData()

members = Table(
    "members",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("full_name", String(100), nullable=False),
    # Uniqueness of email and phone is enforced independently here; the
    # service-level conflict check is only an early rejection.
    Column("email", String(255), nullable=False, unique=True),
    Column("phone", String(10), nullable=False, unique=True),
    Column("address", String(200), nullable=False),
    Column("package_type", String(16), nullable=False, default="basic"),
    Column("membership_status", String(16), nullable=False, default="active"),
    Column("join_date", DateTime(timezone=True), nullable=False),
    Column("expiry_date", DateTime(timezone=True), nullable=False),
    Column("emergency_contact", JSON, nullable=True),
    Column("medical_info", JSON, nullable=True),
    Column("payment_history", JSON, nullable=False, default=list),
    Column("created_by", String(36), nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    Index("ix_members_status_expiry", "membership_status", "expiry_date"),
    Index("ix_members_created_at", "created_at"),
)

users = Table(
    "users",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("name", String(100), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("role", String(16), nullable=False, default="staff"),
    Column("last_login", DateTime(timezone=True), nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)
