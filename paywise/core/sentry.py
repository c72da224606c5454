"""Sentry error tracking integration.

Request bodies carry salaries, budgets and emails, so events are sent without
PII and with request data and cookies stripped.
"""

from typing import Any

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from paywise import __version__
from paywise.core.config import settings

SCRUBBED_REQUEST_KEYS = ("data", "cookies", "query_string")
SCRUBBED_HEADERS = ("x-admin-key", "x-user-id", "cookie", "authorization")


def scrub_event(event: dict[str, Any], hint: dict[str, Any]) -> dict[str, Any]:
    """Drop request payloads and identifying headers from a Sentry event."""
    request = event.get("request")
    if not request:
        return event

    for key in SCRUBBED_REQUEST_KEYS:
        request.pop(key, None)
    headers = request.get("headers")
    if isinstance(headers, dict):
        request["headers"] = {
            name: value for name, value in headers.items() if name.lower() not in SCRUBBED_HEADERS
        }
    return event


def init_sentry() -> bool:
    """Initialize Sentry when a DSN is configured.

    Returns:
        True if Sentry was initialized.
    """
    if not settings.sentry_dsn:
        return False

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        release=f"paywise@{__version__}",
        traces_sample_rate=settings.sentry_traces_sample_rate,
        send_default_pii=False,
        before_send=scrub_event,
        integrations=[
            StarletteIntegration(transaction_style="endpoint"),
            FastApiIntegration(
                transaction_style="endpoint",
                failed_request_status_codes={*range(500, 600)},
            ),
        ],
    )
    return True
