"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: el Core depende de abstracciones.
"""

from core.interfaces.api import AdminApi, ApiResponse, RawBodyResponse
from core.interfaces.resource import (
    DeletableBinding,
    EndpointBinding,
    EntityCodec,
    ResourceKind,
    SingletonCodec,
)

__all__ = [
    "AdminApi",
    "ApiResponse",
    "DeletableBinding",
    "EndpointBinding",
    "EntityCodec",
    "RawBodyResponse",
    "ResourceKind",
    "SingletonCodec",
]
