"""Estate CRUD with owner/collaborator access rules."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from legatepro.auth.tenant_context import TenantContext, enforce_estate_access
from legatepro.core.exceptions import ValidationError
from legatepro.models import Estate, EstateStatus
from legatepro.services.base_service import BaseService
from legatepro.services.billing_repository import BillingRepository

logger = logging.getLogger(__name__)


class EstateService(BaseService):
    def __init__(self, db: Session | None = None) -> None:
        super().__init__(db)
        self.repository = BillingRepository(self.db)

    def require_access(self, context: TenantContext, estate_id: int, write: bool = False) -> Estate:
        """Return the estate when `context` may read it (or write it, when `write`)."""
        estate, collaborator_role = self.repository.get_estate(context.tenant_id, estate_id)
        enforce_estate_access(estate.tenant_id, context, collaborator_role=collaborator_role, write=write)
        return estate

    def list_estates(self, context: TenantContext) -> list[Estate]:
        return self.repository.list_estates(context.tenant_id)

    def create_estate(
        self,
        context: TenantContext,
        display_name: str | None = None,
        case_name: str | None = None,
        decedent_name: str | None = None,
        court_county: str | None = None,
        court_state: str | None = None,
        court_case_number: str | None = None,
    ) -> Estate:
        if not any(value and value.strip() for value in (display_name, case_name, decedent_name)):
            raise ValidationError("An estate needs a display name, case name or decedent name.")

        estate = Estate(
            tenant_id=context.tenant_id,
            display_name=display_name,
            case_name=case_name,
            decedent_name=decedent_name,
            court_county=court_county,
            court_state=court_state.upper() if court_state else None,
            court_case_number=court_case_number,
            status=EstateStatus.OPEN.value,
        )
        self.db.add(estate)
        self.commit()
        self.db.refresh(estate)
        logger.info(
            "estate.created",
            extra={"event": "estate.created", "tenant_id": context.tenant_id, "estate_id": estate.id},
        )
        return estate
