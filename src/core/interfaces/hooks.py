"""Hooks de observabilidad inyectables.

Por qué hooks en vez de logging global:
- El caller decide qué hacer con cada evento (rich, logging, métricas, nada).
- Los tests pueden capturar eventos sin parchear loggers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol, runtime_checkable


@dataclass(frozen=True)
class RequestEvent:
    """Evento estructurado de una llamada al API."""

    endpoint: str | None
    method: str
    url: str
    body: Any = None
    status_code: int | None = None
    elapsed_ms: float | None = None
    error: str | None = None


@runtime_checkable
class RequestHook(Protocol):
    def __call__(self, event: RequestEvent) -> None: ...


@dataclass
class RequestHooks:
    """Callbacks opcionales por fase de la llamada.

    - `on_request`: antes de enviar (el body ya está validado).
    - `on_response`: respuesta 2xx recibida.
    - `on_error`: status no-2xx o fallo de transporte.
    """

    on_request: Callable[[RequestEvent], None] | None = None
    on_response: Callable[[RequestEvent], None] | None = None
    on_error: Callable[[RequestEvent], None] | None = None

    @classmethod
    def broadcast(cls, hook: RequestHook) -> "RequestHooks":
        """Mismo callback para las tres fases."""

        return cls(on_request=hook, on_response=hook, on_error=hook)
