"""Canonical enum values for the tenant-aware schema."""

from __future__ import annotations

import enum


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    OWNER = "owner"
    EDITOR = "editor"
    VIEWER = "viewer"


class EstateStatus(str, enum.Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"


class CollaboratorRole(str, enum.Enum):
    VIEWER = "VIEWER"
    EDITOR = "EDITOR"


class InvoiceStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    SENT = "SENT"
    UNPAID = "UNPAID"
    PARTIAL = "PARTIAL"
    PAID = "PAID"
    VOID = "VOID"


class LineItemType(str, enum.Enum):
    TIME = "TIME"
    EXPENSE = "EXPENSE"
    ADJUSTMENT = "ADJUSTMENT"


class InvoiceTerms(str, enum.Enum):
    DUE_ON_RECEIPT = "DUE_ON_RECEIPT"
    NET_15 = "NET_15"
    NET_30 = "NET_30"
    NET_45 = "NET_45"
    NET_60 = "NET_60"

    @property
    def days(self) -> int:
        if self is InvoiceTerms.DUE_ON_RECEIPT:
            return 0
        return int(self.value.split("_", 1)[1])


OUTSTANDING_STATUSES = frozenset({InvoiceStatus.SENT, InvoiceStatus.UNPAID, InvoiceStatus.PARTIAL})
