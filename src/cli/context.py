"""Construcción del cliente para los comandos CLI.

Vive en su propio módulo para que `main` y `doctor` compartan la misma
factoría (y los tests puedan sustituirla en un solo punto).
"""

from __future__ import annotations

from adapters.araria_client import ArariaClient
from core.config import ArariaSettings, ClientConfig
from core.interfaces.hooks import RequestHooks


def build_client(settings: ArariaSettings, hooks: RequestHooks | None = None) -> ArariaClient:
    return ArariaClient(ClientConfig.from_settings(settings), hooks=hooks)
