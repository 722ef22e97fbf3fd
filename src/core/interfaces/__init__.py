"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol/dataclasses) que consumen los adaptadores.
- Permite inyectar comportamiento (hooks) sin acoplar el Core a la CLI.
"""

from core.interfaces.hooks import RequestEvent, RequestHook, RequestHooks

__all__ = ["RequestEvent", "RequestHook", "RequestHooks"]
