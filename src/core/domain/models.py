"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los valores inmutables (credenciales, diagnósticos) se comparten entre hilos
  sin locks.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, SecretStr
from pydantic.config import ConfigDict


class Severity(str, Enum):
    ERROR = "error"


class Operation(str, Enum):
    """Operaciones del ciclo de vida de un recurso."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    IMPORT = "import"


class LifecycleState(str, Enum):
    """Estados de una instancia gestionada.

    Transiciones: unmanaged -> creating -> managed -> {reading, updating}
    -> deleting -> unmanaged; import entra directamente en managed.
    """

    UNMANAGED = "unmanaged"
    CREATING = "creating"
    MANAGED = "managed"
    READING = "reading"
    UPDATING = "updating"
    DELETING = "deleting"


# Estado transitorio mientras corre la operación y estado final si tiene éxito.
TRANSITIONS: dict[Operation, tuple[LifecycleState | None, LifecycleState]] = {
    Operation.CREATE: (LifecycleState.CREATING, LifecycleState.MANAGED),
    Operation.READ: (LifecycleState.READING, LifecycleState.MANAGED),
    Operation.UPDATE: (LifecycleState.UPDATING, LifecycleState.MANAGED),
    Operation.DELETE: (LifecycleState.DELETING, LifecycleState.UNMANAGED),
    Operation.IMPORT: (None, LifecycleState.MANAGED),
}


class Credentials(BaseModel):
    """Credenciales del admin de Medusa.

    Se resuelven una vez (config explícita > entorno) y no cambian durante la
    vida del cliente.
    """

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(
        ...,
        min_length=1,
        description="Admin API base URL.",
    )
    identity: str = Field(
        ...,
        min_length=1,
        description="Email del usuario admin.",
    )
    secret: SecretStr = Field(
        ...,
        description="Password del usuario admin.",
    )


class Diagnostic(BaseModel):
    """Diagnóstico uniforme que se muestra al operador.

    Por qué existe:
    - Unifica errores de transporte, status inesperados, payloads vacíos y
      validación de esquema en una estructura común.
    """

    model_config = ConfigDict(frozen=True)

    severity: Severity = Field(
        default=Severity.ERROR,
        description="Severidad (hoy siempre 'error').",
    )
    summary: str = Field(
        ...,
        min_length=1,
        description="Resumen corto, p.ej. 'Error creating region'.",
    )
    detail: str = Field(
        ...,
        description="Detalle con status code y body crudo, o el error de transporte.",
    )

    def __str__(self) -> str:
        return f"{self.summary}: {self.detail}"


class LifecycleResult(BaseModel):
    """Resultado de una operación del ciclo de vida.

    Reglas:
    - O bien `state` trae la entidad completa tras la operación, o bien hay
      diagnósticos; nunca ambos.
    - `lifecycle` es el estado alcanzado (None si la operación falló).
    """

    operation: Operation
    resource: str = Field(..., min_length=1)
    state: dict[str, Any] | None = None
    lifecycle: LifecycleState | None = None
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    @property
    def has_error(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self.diagnostics)
