"""Startup validation and bootstrap helpers."""

from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from legatepro.billing.money import LEGACY_CENTS_THRESHOLD
from legatepro.core.config import get_config
from legatepro.core.logging_config import configure_logging
from legatepro.database import db as database

logger = logging.getLogger(__name__)


def check_billing_schema() -> str:
    """Report whether invoices can carry authoritative cents.

    Returns "ok", "not_migrated" (no invoices table) or "legacy_amounts_only"
    (the amount_cents migration has not been applied).
    """
    try:
        inspector = inspect(database.get_engine())
        if not inspector.has_table("invoices"):
            return "not_migrated"
        columns = {column["name"] for column in inspector.get_columns("invoices")}
    except SQLAlchemyError as exc:
        logger.warning(
            "startup.schema.inspect_failed",
            extra={"event": "startup.schema.inspect_failed", "reason": exc.__class__.__name__},
        )
        return "not_migrated"
    return "ok" if "amount_cents" in columns else "legacy_amounts_only"


def validate_startup_config() -> None:
    """Fail-fast config and connectivity checks."""
    config = get_config()
    database_ok = database.verify_database_connection()
    active_database_url = database.get_active_database_url()
    if not database_ok and config.DB_CONNECTIVITY_REQUIRED:
        raise RuntimeError("Database connectivity check failed.")

    schema_state = check_billing_schema() if database_ok else "unknown"
    if schema_state != "ok":
        # Dashboards still render; every legacy row goes through the magnitude guess.
        logger.warning(
            "startup.schema.incomplete",
            extra={"event": "startup.schema.incomplete", "schema_state": schema_state},
        )
    if config.LEGACY_CENTS_THRESHOLD != LEGACY_CENTS_THRESHOLD:
        logger.warning(
            "startup.billing.custom_legacy_threshold",
            extra={
                "event": "startup.billing.custom_legacy_threshold",
                "legacy_cents_threshold": config.LEGACY_CENTS_THRESHOLD,
            },
        )
    if config.is_production and active_database_url.startswith("sqlite"):
        logger.warning(
            "startup.production.sqlite_detected",
            extra={"event": "startup.production.sqlite_detected"},
        )

    logger.info(
        "startup.config.validated",
        extra={
            "event": "startup.config.validated",
            "env": config.ENV,
            "database_url_scheme": active_database_url.split("://", 1)[0],
            "db_connectivity_required": config.DB_CONNECTIVITY_REQUIRED,
            "schema_state": schema_state,
            "default_currency": config.DEFAULT_CURRENCY,
        },
    )


def bootstrap() -> None:
    """Initialize logging and validate runtime configuration."""
    configure_logging()
    validate_startup_config()
