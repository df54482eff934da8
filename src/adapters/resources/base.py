"""Piezas comunes de los recursos Medusa.

Idea:
- En vez de repetir Create/Read/Update/Delete por recurso, cada módulo declara
  modelos wire (Pydantic), un esquema y una ruta; el controlador genérico hace
  el resto.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Callable, TypeVar
from urllib.parse import quote

from pydantic import BaseModel, ValidationError
from pydantic.config import ConfigDict

from core.errors import DecodeError
from core.interfaces.api import AdminApi, ApiResponse

T = TypeVar("T")


def extract_ids(items: Iterable[T] | None, get_id: Callable[[T], str]) -> list[str]:
    if items is None:
        return []
    return [get_id(item) for item in items]


class WireModel(BaseModel):
    """Base de los bodies de request: ignora atributos que no viajan (p.ej. `id`)."""

    model_config = ConfigDict(extra="ignore")


class RemoteModel(BaseModel):
    """Base de las entidades decodificadas: tolera campos extra del servidor."""

    model_config = ConfigDict(extra="ignore")


@dataclass(frozen=True)
class CollectionEndpoints:
    """Rutas REST clásicas: colección + ítem por id."""

    path: str
    requires_id: bool = True

    def item(self, identifier: str) -> str:
        return f"{self.path}/{quote(identifier, safe='')}"

    def create(self, api: AdminApi, body: dict[str, Any]) -> ApiResponse:
        return api.call("POST", self.path, json=body)

    def read(self, api: AdminApi, identifier: str) -> ApiResponse:
        return api.call("GET", self.item(identifier))

    def update(self, api: AdminApi, identifier: str, body: dict[str, Any]) -> ApiResponse:
        return api.call("POST", self.item(identifier), json=body)

    def delete(self, api: AdminApi, identifier: str) -> ApiResponse:
        return api.call("DELETE", self.item(identifier))


@dataclass(frozen=True)
class SingletonEndpoints:
    """Recurso único sin id en la ruta y sin endpoint destructivo (p.ej. store)."""

    path: str
    requires_id: bool = False

    def create(self, api: AdminApi, body: dict[str, Any]) -> ApiResponse:
        return api.call("POST", self.path, json=body)

    def read(self, api: AdminApi, identifier: str) -> ApiResponse:
        return api.call("GET", self.path)

    def update(self, api: AdminApi, identifier: str, body: dict[str, Any]) -> ApiResponse:
        return api.call("POST", self.path, json=body)


class ModelCodec:
    """Codec basado en modelos Pydantic y un sobre JSON (`{"region": {...}}`)."""

    label: str
    envelope: str
    create_model: type[WireModel]
    update_model: type[WireModel]
    remote_model: type[RemoteModel]

    def encode_create(self, declared: Mapping[str, Any]) -> dict[str, Any]:
        return self.create_model.model_validate(dict(declared)).model_dump(mode="json", exclude_none=True)

    def encode_update(self, declared: Mapping[str, Any]) -> dict[str, Any]:
        return self.update_model.model_validate(dict(declared)).model_dump(mode="json", exclude_none=True)

    def decode(self, payload: Any) -> dict[str, Any]:
        if not isinstance(payload, dict) or payload.get(self.envelope) is None:
            raise DecodeError(f"{self.label} is nil")
        try:
            remote = self.remote_model.model_validate(payload[self.envelope])
        except ValidationError as exc:
            raise DecodeError(f"invalid {self.label} payload: {exc}") from exc
        return self.to_attributes(remote)

    def to_attributes(self, remote: Any) -> dict[str, Any]:
        return remote.model_dump(mode="json")
