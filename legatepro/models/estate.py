"""Estate and collaborator model module."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from legatepro.models.base import AuditMixin, Base, TenantScopedMixin
from legatepro.models.enums import CollaboratorRole, EstateStatus


class Estate(Base, AuditMixin, TenantScopedMixin):
    __tablename__ = "estates"
    __table_args__ = (Index("idx_estates_tenant_status", "tenant_id", "status"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    display_name: Mapped[str | None] = mapped_column(String(255))
    case_name: Mapped[str | None] = mapped_column(String(255))
    decedent_name: Mapped[str | None] = mapped_column(String(255))
    court_county: Mapped[str | None] = mapped_column(String(120))
    court_state: Mapped[str | None] = mapped_column(String(2))
    court_case_number: Mapped[str | None] = mapped_column(String(120))
    status: Mapped[str] = mapped_column(String(20), default=EstateStatus.OPEN.value, nullable=False)

    collaborators = relationship("EstateCollaborator", back_populates="estate", cascade="all, delete-orphan")
    invoices = relationship("Invoice", back_populates="estate")
    time_entries = relationship("TimeEntry", back_populates="estate")


class EstateCollaborator(Base, AuditMixin):
    """Grants a second tenant access to one estate."""

    __tablename__ = "estate_collaborators"
    __table_args__ = (UniqueConstraint("estate_id", "tenant_id", name="uq_estate_collaborators_estate_tenant"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    estate_id: Mapped[int] = mapped_column(ForeignKey("estates.id", ondelete="CASCADE"), nullable=False, index=True)
    tenant_id: Mapped[int] = mapped_column(ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    role: Mapped[str] = mapped_column(String(20), default=CollaboratorRole.VIEWER.value, nullable=False)

    estate = relationship("Estate", back_populates="collaborators")
