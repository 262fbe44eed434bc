"""Configuración de la aplicación.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) fuera del dispatcher:
  el Core recibe un `RequestConfiguration` ya armado y nunca lee el entorno.
- Permite que adaptadores (HTTP) y CLI lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import RequestConfiguration


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "authwire"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "authwire"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "authwire"
    return Path.home() / ".config" / "authwire"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="AUTHWIRE_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_key: str | None = Field(
        default=None,
        description="API key del proyecto en el backend de identidad.",
    )
    app_id: str | None = Field(
        default=None,
        description="Identificador de la aplicación cliente.",
    )
    backend_base_url: str = Field(
        default="https://identitytoolkit.googleapis.com/v2",
        min_length=8,
        description="Base URL del backend; el endpoint se concatena a continuación.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="authwire/0.1",
        min_length=1,
        description="User-Agent de las peticiones al backend.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR).",
    )

    def request_configuration(self) -> RequestConfiguration:
        """Configuración ambiental para construir requests.

        Lanza `ValueError` si no hay API key configurada.
        """

        if not self.api_key:
            raise ValueError("AUTHWIRE_API_KEY is not configured")
        return RequestConfiguration(api_key=self.api_key, app_id=self.app_id)
