"""Configuración del cliente.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- `ClientConfig` es el valor inmutable que recibe el cliente HTTP; se puede
  construir a mano o desde `ArariaSettings`.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.profiles import DEFAULT_BASE_URL, DeploymentProfile


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "araria-client"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "araria-client"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "araria-client"
    return Path.home() / ".config" / "araria-client"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# araria-client user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


def normalize_base_url(value: str | None) -> str:
    """Origen efectivo: default de producción si falta, sin `/` final."""

    url = (value or "").strip() or DEFAULT_BASE_URL
    return url.rstrip("/")


class ArariaSettings(BaseSettings):
    """Configuración leída del entorno (`ARARIA_*`) y de los `.env`."""

    model_config = SettingsConfigDict(
        env_prefix="ARARIA_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_key: str | None = Field(
        default=None,
        description="API key de Araria.",
    )
    base_url: str | None = Field(
        default=None,
        description="Origen del API; vacío => producción.",
    )
    profile: DeploymentProfile = Field(
        default=DeploymentProfile.ARARIA,
        description="Esquema de autenticación y prefijo de paths (araria/bearer).",
    )
    http_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="araria-client/0.1",
        min_length=1,
        description="User-Agent enviado en cada request.",
    )


class ClientConfig(BaseModel):
    """Configuración inmutable de un `ArariaClient`."""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(..., min_length=1)
    base_url: str = Field(default=DEFAULT_BASE_URL)
    profile: DeploymentProfile = Field(default=DeploymentProfile.ARARIA)
    timeout_seconds: float = Field(default=60.0, gt=0)
    user_agent: str = Field(default="araria-client/0.1", min_length=1)

    @field_validator("base_url", mode="before")
    @classmethod
    def _strip_base_url(cls, value: object) -> object:
        if value is None or isinstance(value, str):
            return normalize_base_url(value)
        return value

    @classmethod
    def from_settings(cls, settings: ArariaSettings | None = None) -> "ClientConfig":
        settings = settings or ArariaSettings()
        if not settings.api_key:
            raise ValueError("ARARIA_API_KEY is not set")
        return cls(
            api_key=settings.api_key,
            base_url=normalize_base_url(settings.base_url),
            profile=settings.profile,
            timeout_seconds=settings.http_timeout_seconds,
            user_agent=settings.user_agent,
        )

    def url_for(self, path: str) -> str:
        """URL absoluta de un path relativo del API (aplica el prefijo del perfil)."""

        return f"{self.base_url}/{self.profile.path_prefix}{path.lstrip('/')}"
