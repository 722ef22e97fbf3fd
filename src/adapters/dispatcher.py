"""Despacho de requests al API Araria.

Responsabilidad:
- Validar el payload de un endpoint del registro (si declara schema).
- Emitir exactamente una request HTTP y devolver el cuerpo sin transformar.
- Convertir fallos de red y status no-2xx en `TransportError`.

No hay reintentos, caché ni deduplicación: una invocación => una request.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Mapping
from typing import Any, Callable

import httpx

from core.config import ClientConfig
from core.endpoints import EndpointDescriptor
from core.errors import TransportError
from core.interfaces.hooks import RequestEvent, RequestHooks
from core.validation import validate_payload

logger = logging.getLogger(__name__)

FilesPayload = Mapping[str, Any]


def decode_body(response: httpx.Response) -> Any:
    """JSON parseado si el cuerpo lo es; texto si no; None si está vacío."""

    if not response.content:
        return None
    try:
        return json.loads(response.content)
    except ValueError:
        return response.text


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000.0, 2)


class Dispatcher:
    """Emisor de requests ligado a una `ClientConfig` y un `httpx.AsyncClient`."""

    def __init__(
        self,
        config: ClientConfig,
        client: httpx.AsyncClient,
        hooks: RequestHooks | None = None,
    ) -> None:
        self._config = config
        self._client = client
        self._hooks = hooks or RequestHooks()
        # Se envía en cada request: un `httpx.AsyncClient` del caller no trae el header de auth.
        self._auth_headers = config.profile.auth_headers(config.api_key)

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _emit(self, hook: Callable[[RequestEvent], None] | None, event: RequestEvent) -> None:
        if hook is not None:
            hook(event)

    async def call(
        self,
        endpoint: EndpointDescriptor,
        payload: Any = None,
        *,
        files: FilesPayload | None = None,
        **path_params: Any,
    ) -> Any:
        """Valida (si hay schema), renderiza el path y despacha."""

        body: dict[str, Any] | None = None
        if endpoint.schema is not None:
            body = validate_payload(endpoint.schema, payload)
        elif payload is not None:
            raise ValueError(f"{endpoint.name} does not take a request body")

        path = endpoint.render_path(**path_params)
        return await self.dispatch(endpoint.method, path, body, files=files, endpoint=endpoint.name)

    async def dispatch(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        files: FilesPayload | None = None,
        endpoint: str | None = None,
    ) -> Any:
        """Una request HTTP. Devuelve el cuerpo decodificado o lanza `TransportError`."""

        url = self._config.url_for(path)
        self._emit(
            self._hooks.on_request,
            RequestEvent(endpoint=endpoint, method=method, url=url, body=body),
        )
        logger.debug("-> %s %s", method, url)

        kwargs: dict[str, Any] = {"headers": self._auth_headers}
        if files is not None:
            kwargs["files"] = files
        elif body is not None:
            kwargs["json"] = body

        started = time.perf_counter()
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            elapsed = _elapsed_ms(started)
            logger.debug("xx %s %s failed after %sms: %r", method, url, elapsed, exc)
            self._emit(
                self._hooks.on_error,
                RequestEvent(
                    endpoint=endpoint,
                    method=method,
                    url=url,
                    body=body,
                    elapsed_ms=elapsed,
                    error=type(exc).__name__,
                ),
            )
            raise TransportError(
                f"{method} {url} failed: {exc}",
                method=method,
                url=url,
            ) from exc

        elapsed = _elapsed_ms(started)
        payload = decode_body(response)
        logger.debug("<- %s %s HTTP %s (%sms)", method, url, response.status_code, elapsed)

        if not response.is_success:
            self._emit(
                self._hooks.on_error,
                RequestEvent(
                    endpoint=endpoint,
                    method=method,
                    url=url,
                    body=body,
                    status_code=response.status_code,
                    elapsed_ms=elapsed,
                    error=f"HTTP {response.status_code}",
                ),
            )
            raise TransportError(
                f"{method} {url} returned HTTP {response.status_code}",
                status_code=response.status_code,
                body=payload,
                method=method,
                url=url,
            )

        self._emit(
            self._hooks.on_response,
            RequestEvent(
                endpoint=endpoint,
                method=method,
                url=url,
                body=body,
                status_code=response.status_code,
                elapsed_ms=elapsed,
            ),
        )
        return payload
