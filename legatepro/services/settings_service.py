"""Per-tenant workspace billing defaults."""

from __future__ import annotations

import logging
from typing import Any

from legatepro.billing.formatting import normalize_currency
from legatepro.core.exceptions import ValidationError
from legatepro.models import InvoiceTerms, WorkspaceSettings
from legatepro.services.base_service import BaseService

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("firm_name", "default_currency", "default_hourly_rate_cents", "default_invoice_terms")


class SettingsService(BaseService):
    def get_settings(self, tenant_id: int) -> WorkspaceSettings | None:
        return self.db.query(WorkspaceSettings).filter(WorkspaceSettings.tenant_id == tenant_id).first()

    def get_or_default(self, tenant_id: int) -> WorkspaceSettings:
        """Stored settings, or an unsaved row carrying the defaults."""
        settings = self.get_settings(tenant_id)
        if settings is not None:
            return settings
        return WorkspaceSettings(
            tenant_id=tenant_id,
            default_currency="USD",
            default_hourly_rate_cents=None,
            default_invoice_terms=InvoiceTerms.NET_30.value,
        )

    def update_settings(self, tenant_id: int, changes: dict[str, Any]) -> WorkspaceSettings:
        settings = self.get_settings(tenant_id)
        if settings is None:
            settings = WorkspaceSettings(tenant_id=tenant_id)
            self.db.add(settings)

        for name, value in changes.items():
            if name not in EDITABLE_FIELDS:
                raise ValidationError(f"Unknown settings field: {name}")
            if name == "default_currency":
                value = normalize_currency(value)
                if len(value) != 3 or not value.isalpha():
                    raise ValidationError("default_currency must be a 3-letter currency code.")
            elif name == "default_invoice_terms":
                try:
                    value = InvoiceTerms(str(value).upper()).value
                except ValueError as exc:
                    raise ValidationError(f"Unknown invoice terms: {value}") from exc
            elif name == "default_hourly_rate_cents" and value is not None and int(value) < 0:
                raise ValidationError("default_hourly_rate_cents must be >= 0.")
            setattr(settings, name, value)

        self.commit()
        self.db.refresh(settings)
        logger.info(
            "settings.updated",
            extra={"event": "settings.updated", "tenant_id": tenant_id, "fields": sorted(changes)},
        )
        return settings
