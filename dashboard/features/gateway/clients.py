from __future__ import annotations

import httpx

from .errors import RequestSetupError

MOCK_MODE_REJECTION = "Using mock data"
DEFAULT_HEADERS = {"Accept": "application/json"}


async def reject_in_mock_mode(request: httpx.Request) -> None:
    raise RequestSetupError(f"{MOCK_MODE_REJECTION}: refused {request.method} {request.url}")


def build_service_client(
    base_url: str,
    *,
    mock_mode: bool = False,
    timeout: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the client for one backend service.

    ``timeout=None`` leaves the call unbounded locally. In mock mode every
    request is refused by a request hook before it reaches the transport.
    """
    event_hooks = {"request": [reject_in_mock_mode]} if mock_mode else {}
    return httpx.AsyncClient(
        base_url=base_url,
        headers=DEFAULT_HEADERS,
        timeout=httpx.Timeout(timeout),
        transport=transport,
        event_hooks=event_hooks,
    )
