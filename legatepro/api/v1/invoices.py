"""Invoice endpoints for API v1."""

from __future__ import annotations

from collections import defaultdict

from fastapi import APIRouter, Header, status
from fastapi.responses import Response

from legatepro.api.v1._authz import authorize, to_http_error
from legatepro.billing.aging import AGING_BANDS
from legatepro.billing.formatting import format_money
from legatepro.billing.money import normalize_amount
from legatepro.core.config import get_config
from legatepro.core.exceptions import LegateProException
from legatepro.database.db import get_db_session
from legatepro.models import Invoice
from legatepro.schemas.common import money
from legatepro.schemas.invoices import (
    AgedInvoiceResponse,
    AgingGroupResponse,
    AgingReportResponse,
    InvoiceCreateRequest,
    InvoiceResponse,
    InvoiceStatusUpdateRequest,
    LineItemResponse,
)
from legatepro.services.dashboard_service import estate_label
from legatepro.services.invoice_service import InvoiceService, LineItemInput
from legatepro.services.settings_service import SettingsService
from legatepro.utils.export import frame_to_csv

router = APIRouter(tags=["invoices"])


def to_invoice_response(invoice: Invoice) -> InvoiceResponse:
    amount_cents = normalize_amount(invoice, threshold=get_config().LEGACY_CENTS_THRESHOLD)
    return InvoiceResponse(
        id=invoice.id,
        estate_id=invoice.estate_id,
        invoice_number=invoice.invoice_number,
        status=(invoice.status or "DRAFT").upper(),
        currency=invoice.currency,
        issue_date=invoice.issue_date,
        due_date=invoice.due_date,
        paid_at=invoice.paid_at,
        notes=invoice.notes,
        subtotal_cents=invoice.subtotal_cents,
        tax_rate=invoice.tax_rate,
        tax_cents=invoice.tax_cents,
        amount_cents=amount_cents,
        amount_formatted=format_money(amount_cents, invoice.currency),
        line_items=[LineItemResponse.model_validate(item) for item in invoice.line_items],
    )


@router.get("/estates/{estate_id}/invoices")
def list_estate_invoices(
    estate_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    user = authorize(authorization=authorization, scopes=["invoices.read"])
    try:
        with get_db_session() as session:
            invoices = InvoiceService(session).list_invoices(user.tenant, estate_id)
            items = [to_invoice_response(invoice).model_dump(mode="json") for invoice in invoices]
    except LegateProException as exc:
        raise to_http_error(exc) from exc
    return {"items": items, "total": len(items)}


@router.post(
    "/estates/{estate_id}/invoices",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_estate_invoice(
    estate_id: int,
    payload: InvoiceCreateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> InvoiceResponse:
    user = authorize(authorization=authorization, scopes=["invoices.write"])
    try:
        with get_db_session() as session:
            invoice = InvoiceService(session).create_invoice(
                user.tenant,
                estate_id,
                line_items=[LineItemInput(**item.model_dump()) for item in payload.line_items],
                issue_date=payload.issue_date,
                due_date=payload.due_date,
                currency=payload.currency,
                tax_rate=payload.tax_rate,
                invoice_number=payload.invoice_number,
                notes=payload.notes,
            )
            return to_invoice_response(invoice)
    except LegateProException as exc:
        raise to_http_error(exc) from exc


@router.patch("/estates/{estate_id}/invoices/{invoice_id}/status", response_model=InvoiceResponse)
def update_invoice_status(
    estate_id: int,
    invoice_id: int,
    payload: InvoiceStatusUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> InvoiceResponse:
    user = authorize(authorization=authorization, scopes=["invoices.write"])
    try:
        with get_db_session() as session:
            invoice = InvoiceService(session).change_status(
                user.tenant,
                estate_id,
                invoice_id,
                target=payload.status,
                actor=f"user:{user.user_id}",
            )
            return to_invoice_response(invoice)
    except LegateProException as exc:
        raise to_http_error(exc) from exc


@router.get("/invoices/aging", response_model=AgingReportResponse)
def invoice_aging(authorization: str | None = Header(default=None, alias="Authorization")) -> AgingReportResponse:
    user = authorize(authorization=authorization, scopes=["invoices.read"])
    try:
        with get_db_session() as session:
            report = InvoiceService(session).aging_report(user.tenant)
            currency = (SettingsService(session).get_or_default(user.tenant_id).default_currency or "USD").upper()
    except LegateProException as exc:
        raise to_http_error(exc) from exc

    grouped: dict[str, list[AgedInvoiceResponse]] = defaultdict(list)
    for aged in report.invoices:
        record = aged.invoice
        grouped[aged.band.value].append(
            AgedInvoiceResponse(
                invoice_id=record.invoice_id,
                invoice_number=record.invoice_number,
                estate_id=record.estate_id,
                estate_label=report.labels.get(record.estate_id) or estate_label(record.estate_id),
                status=record.status.value,
                amount=money(record.amount_cents, currency),
                due_date=record.due_basis,
                days_past_due=aged.days_past_due,
            )
        )

    by_band = {bucket.band: bucket for bucket in report.buckets}
    bands = []
    for band_spec in AGING_BANDS:
        bucket = by_band[band_spec.band]
        bands.append(
            AgingGroupResponse(
                band=band_spec.band.value,
                label=band_spec.label,
                total=money(bucket.total_cents, currency),
                invoice_count=bucket.invoice_count,
                share=bucket.share,
                invoices=grouped.get(band_spec.band.value, []),
            )
        )
    outstanding = sum(bucket.total_cents for bucket in report.buckets)
    return AgingReportResponse(currency=currency, outstanding=money(outstanding, currency), bands=bands)


@router.get("/invoices/export")
def export_invoices(authorization: str | None = Header(default=None, alias="Authorization")) -> Response:
    user = authorize(authorization=authorization, scopes=["invoices.export"])
    try:
        with get_db_session() as session:
            frame = InvoiceService(session).export_frame(user.tenant)
    except LegateProException as exc:
        raise to_http_error(exc) from exc
    return Response(
        content=frame_to_csv(frame),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="invoices.csv"'},
    )
