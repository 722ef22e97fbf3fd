"""Modelos y entidades del dominio.

Por qué:
- Aquí viven los schemas del API y los perfiles de despliegue (Pydantic v2 / Enum).
- El dominio no conoce HTTP ni CLI: solo el contrato de la API.
"""
