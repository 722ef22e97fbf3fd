"""Validador estructural genérico.

Responsabilidad:
- Validar un payload (mapping o instancia de schema) contra un schema Pydantic.
- Normalizar: devolver un dict JSON-compatible con nombres de wire y sin los
  campos ausentes (no se aplican defaults).
- Traducir errores de Pydantic a `core.errors.ValidationError`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from core.errors import FieldIssue, ValidationError

logger = logging.getLogger(__name__)

# Etiquetas que Pydantic añade al `loc` para cada rama de `StrictInt | StrictFloat`.
_UNION_TAGS = frozenset({"int", "float"})


def _field_path(loc: tuple[int | str, ...]) -> str:
    parts = [str(p) for p in loc if not (isinstance(p, str) and p in _UNION_TAGS)]
    return ".".join(parts) or "<root>"


def _issues_from(exc: PydanticValidationError) -> list[FieldIssue]:
    issues: list[FieldIssue] = []
    seen: set[str] = set()
    for err in exc.errors(include_url=False):
        path = _field_path(tuple(err.get("loc", ())))
        if path in seen:
            continue
        seen.add(path)
        issues.append(FieldIssue(field=path, message=str(err.get("msg", "")), kind=str(err.get("type", ""))))
    return issues


def validate_payload(schema: type[BaseModel], payload: Any) -> dict[str, Any]:
    """Valida `payload` contra `schema` y devuelve el cuerpo normalizado.

    Acepta:
    - una instancia de `schema` (se revalida para detectar asignaciones inválidas),
    - cualquier `Mapping` con nombres de wire o nombres Python.

    Lanza `ValidationError` con la lista de campos inválidos.
    """

    if isinstance(payload, BaseModel):
        payload = payload.model_dump(by_alias=True, exclude_unset=True)
    if not isinstance(payload, Mapping):
        raise ValidationError(
            schema.__name__,
            [
                FieldIssue(
                    field="<root>",
                    message=f"Expected an object, got {type(payload).__name__}",
                    kind="model_type",
                )
            ],
        )

    try:
        model = schema.model_validate(dict(payload))
    except PydanticValidationError as exc:
        issues = _issues_from(exc)
        logger.debug("Payload rejected by %s: %s", schema.__name__, [i.field for i in issues])
        raise ValidationError(schema.__name__, issues) from exc

    return model.model_dump(mode="json", by_alias=True, exclude_unset=True)
