"""Errores del SDK.

Solo hay dos familias:
- `ValidationError`: el payload no cumple el schema; se lanza antes de tocar la red.
- `TransportError`: el intercambio HTTP falló (red o status no-2xx).

Ambas heredan de `ArariaError` para que el caller pueda capturar todo con un
único `except`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class ArariaError(Exception):
    """Base de todos los errores del cliente."""


@dataclass(frozen=True)
class FieldIssue:
    """Un campo inválido dentro de un payload."""

    field: str
    message: str
    kind: str


class ValidationError(ArariaError, ValueError):
    """El payload no coincide con el schema declarado del endpoint."""

    def __init__(self, schema_name: str, issues: list[FieldIssue]) -> None:
        self.schema_name = schema_name
        self.issues = issues
        detail = "; ".join(f"{i.field}: {i.message}" for i in issues)
        super().__init__(f"Invalid {schema_name}: {detail}")

    @property
    def fields(self) -> list[str]:
        return [i.field for i in self.issues]


class TransportError(ArariaError):
    """Fallo del intercambio HTTP.

    `status_code` es None cuando no hubo respuesta (DNS, conexión, timeout).
    `body` es el cuerpo crudo de la respuesta (JSON parseado o texto) si existe.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: Any = None,
        method: str | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.method = method
        self.url = url
