"""HTTP client helpers for the show configuration CLI."""
from __future__ import annotations

import httpx


def create_client(
    base_url: str, *, timeout: float = 20.0, transport: httpx.AsyncBaseTransport | None = None
) -> httpx.AsyncClient:
    """Instantiate an async HTTPX client with a configurable base URL."""

    return httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)
