"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeout, headers de autenticación y User-Agent.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from core.config import ClientConfig


def build_async_client(
    config: ClientConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` ligado a `config`.

    El header de auth depende del perfil (`x-araria-key` o `Authorization: Bearer`).
    El `Content-Type` lo fija httpx por request (`json=` o `files=`).
    """

    headers: dict[str, str] = {
        "User-Agent": config.user_agent,
        "Accept": "application/json",
    }
    headers.update(config.profile.auth_headers(config.api_key))
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.timeout_seconds),
        headers=headers,
        transport=transport,
    )
