"""Modular SQLAlchemy model package for the tenant-aware schema."""

from legatepro.models.base import Base
from legatepro.models.enums import (
    CollaboratorRole,
    EstateStatus,
    InvoiceStatus,
    InvoiceTerms,
    LineItemType,
    UserRole,
)
from legatepro.models.estate import Estate, EstateCollaborator
from legatepro.models.invoice import Invoice, InvoiceLineItem, InvoiceStatusAudit
from legatepro.models.tenant import Tenant
from legatepro.models.time_entry import TimeEntry
from legatepro.models.user import User
from legatepro.models.workspace_settings import WorkspaceSettings

__all__ = [
    "Base",
    "CollaboratorRole",
    "Estate",
    "EstateCollaborator",
    "EstateStatus",
    "Invoice",
    "InvoiceLineItem",
    "InvoiceStatus",
    "InvoiceStatusAudit",
    "InvoiceTerms",
    "LineItemType",
    "Tenant",
    "TimeEntry",
    "User",
    "UserRole",
    "WorkspaceSettings",
]
