"""Dashboard billing overview endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Header, status
from fastapi.responses import JSONResponse

from legatepro.api.v1._authz import authorize
from legatepro.billing.formatting import minutes_to_hours
from legatepro.core.exceptions import DatabaseError
from legatepro.database.db import get_db_session
from legatepro.schemas.common import ErrorEnvelope, money
from legatepro.schemas.dashboard import (
    AgingBandResponse,
    BillingTotals,
    DashboardResponse,
    EstateBillingResponse,
    RecentInvoiceResponse,
    TrendPoint,
    UnbilledTime,
)
from legatepro.services.dashboard_service import DashboardService, DashboardSummary

router = APIRouter(tags=["dashboard"])


def to_response(summary: DashboardSummary) -> DashboardResponse:
    currency = summary.currency
    totals = summary.totals
    return DashboardResponse(
        currency=currency,
        generated_at=summary.generated_at,
        totals=BillingTotals(
            total_invoiced=money(totals.total_invoiced_cents, currency),
            collected=money(totals.collected_cents, currency),
            outstanding=money(totals.outstanding_cents, currency),
            voided=money(totals.voided_cents, currency),
            invoice_count=totals.invoice_count,
            collection_rate=summary.collection_rate,
        ),
        unbilled=UnbilledTime(
            minutes=summary.unbilled.minutes,
            hours=minutes_to_hours(summary.unbilled.minutes),
            value=money(summary.unbilled.value_cents, currency),
            unvalued_minutes=summary.unvalued_minutes,
        ),
        trend=[
            TrendPoint(
                key=bucket.key,
                label=bucket.label,
                invoiced=money(bucket.invoiced_cents, currency),
                collected=money(bucket.collected_cents, currency),
                outstanding=money(bucket.outstanding_cents, currency),
                collection_rate=bucket.collection_rate,
            )
            for bucket in summary.trend
        ],
        aging=[
            AgingBandResponse(
                band=bucket.band.value,
                label=bucket.label,
                total=money(bucket.total_cents, currency),
                invoice_count=bucket.invoice_count,
                share=bucket.share,
            )
            for bucket in summary.aging
        ],
        estates=[
            EstateBillingResponse(
                estate_id=row.estate_id,
                label=row.label,
                invoiced=money(row.invoiced_cents, currency),
                collected=money(row.collected_cents, currency),
                outstanding=money(row.outstanding_cents, currency),
                voided=money(row.voided_cents, currency),
                unbilled_hours=minutes_to_hours(row.unbilled_minutes),
                unbilled_value=money(row.unbilled_value_cents, currency),
                collection_rate=row.collection_rate,
            )
            for row in summary.estates
        ],
        recent_invoices=[
            RecentInvoiceResponse(
                invoice_id=item.invoice_id,
                invoice_number=item.invoice_number,
                estate_id=item.estate_id,
                estate_label=item.estate_label,
                status=item.status,
                amount=money(item.amount_cents, currency),
                issue_date=item.issue_date,
                due_date=item.due_date,
                days_past_due=item.days_past_due,
            )
            for item in summary.recent_invoices
        ],
        estate_count=summary.estate_count,
        show_onboarding=summary.show_onboarding,
    )


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(authorization: str | None = Header(default=None, alias="Authorization")):
    user = authorize(authorization=authorization, scopes=["dashboard.read"])
    try:
        with get_db_session() as session:
            summary = DashboardService(session).build_summary(tenant_id=user.tenant_id)
    except DatabaseError:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=ErrorEnvelope(error_code="dashboard_unavailable").model_dump(exclude_none=True),
        )
    return to_response(summary)
