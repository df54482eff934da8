"""Esquemas de atributos por tipo de recurso.

Por qué en el dominio:
- El host (orquestador, CLI, tests) necesita enumerar nombres, tipos y
  modificadores de cada atributo sin conocer el wire format.
- La validación del estado declarado ocurre antes de emitir cualquier request.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.models import Diagnostic, Operation


class AttributeType(str, Enum):
    STRING = "string"
    BOOL = "bool"
    NUMBER = "number"
    LIST_OF_STRING = "list(string)"


class Modifier(str, Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"
    COMPUTED = "computed"
    IMMUTABLE = "immutable"


class Attribute(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    type: AttributeType
    modifiers: frozenset[Modifier] = Field(default_factory=frozenset)
    description: str = ""

    @property
    def required(self) -> bool:
        return Modifier.REQUIRED in self.modifiers

    @property
    def settable(self) -> bool:
        # Solo computed (sin optional/required) => lo decide el servidor.
        return Modifier.REQUIRED in self.modifiers or Modifier.OPTIONAL in self.modifiers

    def accepts(self, value: Any) -> bool:
        if value is None:
            return True
        if self.type is AttributeType.STRING:
            return isinstance(value, str)
        if self.type is AttributeType.BOOL:
            return isinstance(value, bool)
        if self.type is AttributeType.NUMBER:
            return isinstance(value, (int, float)) and not isinstance(value, bool)
        return isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value)


def attr(name: str, type_: AttributeType, *modifiers: Modifier, description: str = "") -> Attribute:
    return Attribute(name=name, type=type_, modifiers=frozenset(modifiers), description=description)


def id_attribute(entity_label: str) -> Attribute:
    return attr(
        "id",
        AttributeType.STRING,
        Modifier.COMPUTED,
        Modifier.IMMUTABLE,
        description=f"The id of the {entity_label}.",
    )


class ResourceSchema(BaseModel):
    """Esquema completo de un tipo de recurso."""

    model_config = ConfigDict(frozen=True)

    type_name: str = Field(..., min_length=1, description="Nombre público, p.ej. 'medusa_region'.")
    description: str = ""
    attributes: tuple[Attribute, ...] = ()

    def attribute(self, name: str) -> Attribute | None:
        for a in self.attributes:
            if a.name == name:
                return a
        return None

    def names(self) -> list[str]:
        return [a.name for a in self.attributes]

    def validate_declared(self, declared: Mapping[str, Any], operation: Operation) -> list[Diagnostic]:
        """Valida el estado declarado para `operation`.

        - create: todos los atributos `required` deben estar presentes.
        - update: solo se validan los atributos presentes (update parcial).
        - `id` nunca se acepta en create: lo asigna la API. En el resto debe ser string.
        """

        summary = f"Invalid {self.type_name} configuration"
        out: list[Diagnostic] = []

        for key, value in declared.items():
            spec = self.attribute(key)
            if spec is None:
                out.append(Diagnostic(summary=summary, detail=f"Unknown attribute {key!r}."))
                continue
            if key == "id":
                if operation is Operation.CREATE and value is not None:
                    out.append(
                        Diagnostic(summary=summary, detail="Attribute 'id' is assigned by the API on create.")
                    )
                elif not spec.accepts(value):
                    out.append(
                        Diagnostic(summary=summary, detail=f"Attribute 'id' expects string, got {type(value).__name__}.")
                    )
                continue
            if not spec.settable and value is not None:
                out.append(Diagnostic(summary=summary, detail=f"Attribute {key!r} is computed and cannot be set."))
                continue
            if not spec.accepts(value):
                out.append(
                    Diagnostic(
                        summary=summary,
                        detail=f"Attribute {key!r} expects {spec.type.value}, got {type(value).__name__}.",
                    )
                )

        if operation is Operation.CREATE:
            for spec in self.attributes:
                if spec.required and declared.get(spec.name) is None:
                    out.append(Diagnostic(summary=summary, detail=f"Missing required attribute {spec.name!r}."))

        return out

    def describe(self) -> dict[str, Any]:
        """Representación serializable para el host (JSON)."""

        return {
            "type_name": self.type_name,
            "description": self.description,
            "attributes": {
                a.name: {
                    "type": a.type.value,
                    "modifiers": sorted(m.value for m in a.modifiers),
                    "description": a.description,
                }
                for a in self.attributes
            },
        }
