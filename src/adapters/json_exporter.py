"""Exportación JSON de respuestas del API.

Por qué JSON:
- Las respuestas se devuelven sin transformar; persistirlas tal cual permite
  inspeccionarlas o encadenarlas con otras herramientas.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def dump_response(payload: Any) -> str:
    """Serializa un cuerpo de respuesta con formato estable."""

    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)


def export_response_json(*, payload: Any, output_path: Path) -> Path:
    """Escribe `payload` a JSON UTF-8 (crea directorios si faltan)."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dump_response(payload) + "\n", encoding="utf-8")
    return output_path
