"""Declarative base plus the timestamp and tenancy mixins shared by all tables."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class SoftDeleteMixin:
    """Rows are hidden by stamping `deleted_at`; nothing is physically removed."""

    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    @classmethod
    def not_deleted(cls):
        return cls.deleted_at.is_(None)

    def mark_deleted(self, at: datetime | None = None) -> None:
        self.deleted_at = at or utcnow()


class AuditMixin(SoftDeleteMixin):
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class TenantScopedMixin:
    """Owning tenant of a business row. Shared estates keep their owner's id."""

    tenant_id: Mapped[int] = mapped_column(ForeignKey("tenants.id", ondelete="RESTRICT"), nullable=False, index=True)
