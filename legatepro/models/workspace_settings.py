"""Workspace settings model module."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from legatepro.models.base import AuditMixin, Base
from legatepro.models.enums import InvoiceTerms


class WorkspaceSettings(Base, AuditMixin):
    """Per-tenant billing defaults. At most one row per tenant."""

    __tablename__ = "workspace_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    tenant_id: Mapped[int] = mapped_column(
        ForeignKey("tenants.id", ondelete="CASCADE"), unique=True, nullable=False, index=True
    )
    firm_name: Mapped[str | None] = mapped_column(String(255))
    default_currency: Mapped[str | None] = mapped_column(String(3), default="USD")
    default_hourly_rate_cents: Mapped[int | None] = mapped_column(Integer)
    default_invoice_terms: Mapped[str] = mapped_column(String(20), default=InvoiceTerms.NET_30.value, nullable=False)

    tenant = relationship("Tenant", back_populates="settings")
