"""httpx wrapper.

Why a wrapper:
- Standardizes headers (fixed User-Agent, JSON Accept) for every registry call.
- Makes testing easy: pass a `transport` (e.g. `httpx.MockTransport`).

Timeouts are httpx's defaults on purpose; there are no retries.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings
from core.errors import SmokeTestError


def build_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create a sync `httpx.Client` for the registry API."""

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    try:
        return httpx.Client(
            base_url=settings.registry_base_url,
            follow_redirects=True,
            headers=headers,
            transport=transport,
        )
    except (httpx.InvalidURL, ValueError) as exc:
        raise SmokeTestError("Failed to initialize HTTP client") from exc
