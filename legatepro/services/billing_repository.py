"""Tenant-scoped reads feeding the billing engine."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from legatepro.core.exceptions import DatabaseError, NotFoundError
from legatepro.models import Estate, EstateCollaborator, Invoice, TimeEntry, WorkspaceSettings

logger = logging.getLogger(__name__)


class BillingRepository:
    """Queries scoped to one tenant's own estates plus estates shared with it.

    Every SQLAlchemy failure surfaces as DatabaseError.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    @contextmanager
    def _guard(self, operation: str, tenant_id: int) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(
                "billing_repository.query_failed",
                extra={
                    "event": "billing_repository.query_failed",
                    "operation": operation,
                    "tenant_id": tenant_id,
                    "reason": exc.__class__.__name__,
                },
            )
            raise DatabaseError(f"Failed to load {operation}.") from exc

    @staticmethod
    def _accessible_estate_ids(tenant_id: int):
        shared = select(EstateCollaborator.estate_id).where(EstateCollaborator.tenant_id == tenant_id)
        return select(Estate.id).where(
            Estate.not_deleted(),
            or_(Estate.tenant_id == tenant_id, Estate.id.in_(shared)),
        )

    def list_estates(self, tenant_id: int) -> list[Estate]:
        with self._guard("estates", tenant_id):
            return (
                self.db.query(Estate)
                .filter(Estate.id.in_(self._accessible_estate_ids(tenant_id)))
                .order_by(Estate.id)
                .all()
            )

    def get_estate(self, tenant_id: int, estate_id: int) -> tuple[Estate, str | None]:
        """Return the estate and the tenant's collaborator role (None when owner)."""
        with self._guard("estate", tenant_id):
            estate = (
                self.db.query(Estate)
                .filter(Estate.id == estate_id, Estate.not_deleted())
                .first()
            )
            if estate is None:
                raise NotFoundError(f"Estate not found: {estate_id}")
            if estate.tenant_id == tenant_id:
                return estate, None
            grant = (
                self.db.query(EstateCollaborator)
                .filter(EstateCollaborator.estate_id == estate_id, EstateCollaborator.tenant_id == tenant_id)
                .first()
            )
            if grant is None:
                # Unshared estates are indistinguishable from missing ones.
                raise NotFoundError(f"Estate not found: {estate_id}")
            return estate, grant.role

    def list_invoices(self, tenant_id: int, estate_id: int | None = None) -> list[Invoice]:
        with self._guard("invoices", tenant_id):
            query = self.db.query(Invoice).filter(
                Invoice.not_deleted(),
                Invoice.estate_id.in_(self._accessible_estate_ids(tenant_id)),
            )
            if estate_id is not None:
                query = query.filter(Invoice.estate_id == estate_id)
            return query.order_by(Invoice.id).all()

    def list_unbilled_time_entries(self, tenant_id: int) -> list[TimeEntry]:
        with self._guard("unbilled time entries", tenant_id):
            return (
                self.db.query(TimeEntry)
                .filter(
                    TimeEntry.not_deleted(),
                    TimeEntry.billed_invoice_id.is_(None),
                    TimeEntry.is_archived.is_(False),
                    TimeEntry.estate_id.in_(self._accessible_estate_ids(tenant_id)),
                )
                .order_by(TimeEntry.id)
                .all()
            )

    def get_settings(self, tenant_id: int) -> WorkspaceSettings | None:
        with self._guard("workspace settings", tenant_id):
            return self.db.query(WorkspaceSettings).filter(WorkspaceSettings.tenant_id == tenant_id).first()
