"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/transporte/auth) lean config de forma consistente.

Precedencia:
- Valores explícitos (CLI, host) > variables de entorno `MEDUSA_*` > `.env`.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "medusa-sync"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "medusa-sync"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "medusa-sync"
    return Path.home() / ".config" / "medusa-sync"


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


def write_user_env_vars(values: dict[str, str]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# medusa-sync user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class RecorderMode(str, Enum):
    """Modo del grabador de interacciones HTTP (cassettes)."""

    RECORD = "record"
    REPLAY = "replay"
    RECORD_ONCE = "record_once"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters/host.
    """

    model_config = SettingsConfigDict(
        env_prefix="MEDUSA_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    url: str | None = Field(
        default=None,
        description="Admin API base URL (MEDUSA_URL).",
    )
    admin_email: str | None = Field(
        default=None,
        description="Email del usuario admin (MEDUSA_ADMIN_EMAIL).",
    )
    admin_password: SecretStr | None = Field(
        default=None,
        description="Password del usuario admin (MEDUSA_ADMIN_PASSWORD).",
    )

    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    max_retries: int = Field(
        default=10,
        ge=0,
        le=20,
        description="Reintentos máximos ante fallos transitorios (red, 429, 5xx).",
    )
    debug: bool = Field(
        default=False,
        description="Vuelca requests/responses completos al log (MEDUSA_DEBUG).",
    )

    recorder_mode: RecorderMode | None = Field(
        default=None,
        description="Modo de grabación: record, replay o record_once.",
    )
    cassette: Path | None = Field(
        default=None,
        description="Ruta del cassette YAML (sin extensión se añade .yaml).",
    )

    log_level: str = Field(
        default="WARNING",
        min_length=1,
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR).",
    )
