"""Structured logging helpers shared by services and API routes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class LogContext:
    """Normalized context fields expected in structured logs."""

    tenant_id: int | None = None
    user_id: int | None = None
    estate_id: int | None = None
    request_path: str | None = None


def build_log_event(event: str, context: LogContext, **fields: Any) -> dict[str, Any]:
    """Build the `extra=` payload for a structured log call.

    The result always carries the event name and the context ids so that log
    lines can be filtered per tenant without parsing the message.
    """
    payload: dict[str, Any] = {
        "logged_at": datetime.now(timezone.utc).isoformat(),
        "event": event,
        "tenant_id": context.tenant_id,
        "user_id": context.user_id,
        "estate_id": context.estate_id,
        "request_path": context.request_path,
    }
    payload.update(fields)
    return payload
