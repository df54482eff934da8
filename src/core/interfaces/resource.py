"""Contratos de un tipo de recurso: codec + endpoints + esquema.

Por qué separarlo:
- El controlador del ciclo de vida es uno solo y genérico; lo que cambia por
  tipo de recurso (wire format, rutas, esquema) se inyecta aquí.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from core.domain.schema import ResourceSchema
from core.interfaces.api import AdminApi, ApiResponse


class EntityCodec(Protocol):
    """Conversión declarado <-> wire para un tipo de recurso."""

    def encode_create(self, declared: Mapping[str, Any]) -> dict[str, Any]:
        ...

    def encode_update(self, declared: Mapping[str, Any]) -> dict[str, Any]:
        """Update parcial: los atributos ausentes o None no se envían."""

        ...

    def decode(self, payload: Any) -> dict[str, Any]:
        """Payload de éxito -> atributos. Lanza `DecodeError` si no hay entidad."""

        ...


@runtime_checkable
class SingletonCodec(EntityCodec, Protocol):
    def encode_delete(self, state: Mapping[str, Any]) -> dict[str, Any]:
        """Body del update que "borra" un singleton (resetea campos opcionales)."""

        ...


class EndpointBinding(Protocol):
    """Rutas de un tipo de recurso.

    - `requires_id`: False para singletons (la ruta no lleva id).
    - `delete` es opcional: ver `DeletableBinding`.
    """

    requires_id: bool

    def create(self, api: AdminApi, body: dict[str, Any]) -> ApiResponse:
        ...

    def read(self, api: AdminApi, identifier: str) -> ApiResponse:
        ...

    def update(self, api: AdminApi, identifier: str, body: dict[str, Any]) -> ApiResponse:
        ...


@runtime_checkable
class DeletableBinding(EndpointBinding, Protocol):
    """Rutas con endpoint destructivo. Sin él, el delete es un update de `SingletonCodec`."""

    def delete(self, api: AdminApi, identifier: str) -> ApiResponse:
        ...


@dataclass(frozen=True)
class ResourceKind:
    """Un tipo de entidad gestionable (region, store, ...)."""

    name: str
    label: str
    schema: ResourceSchema
    codec: EntityCodec
    endpoints: EndpointBinding
