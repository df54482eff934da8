"""Recurso Medusa: store (singleton).

Por qué es distinto:
- Siempre existe exactamente una store; la API no expone create ni delete.
- "Crear" es un update del singleton.
- "Borrar" es un update que resetea las plantillas de links a null; el resto
  de la configuración se conserva.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from adapters.resources.base import (
    ModelCodec,
    RemoteModel,
    SingletonEndpoints,
    WireModel,
    extract_ids,
)
from core.domain.schema import AttributeType, Modifier, ResourceSchema, attr, id_attribute
from core.interfaces.resource import ResourceKind

_OPT = (Modifier.OPTIONAL, Modifier.COMPUTED)

TEMPLATE_FIELDS = ("swap_link_template", "payment_link_template", "invite_link_template")

SCHEMA = ResourceSchema(
    type_name="medusa_store",
    description="A store indicates the general configurations and details about the commerce store.",
    attributes=(
        id_attribute("store"),
        attr("name", AttributeType.STRING, *_OPT, description="The name of the store."),
        attr(
            "default_currency_code",
            AttributeType.STRING,
            Modifier.REQUIRED,
            description="The default currency code of the store.",
        ),
        attr(
            "currencies",
            AttributeType.LIST_OF_STRING,
            *_OPT,
            description="Array of available currencies in the store. Each currency is in 3 character ISO code format.",
        ),
        attr("swap_link_template", AttributeType.STRING, *_OPT, description="A template for swap links."),
        attr("payment_link_template", AttributeType.STRING, *_OPT, description="A template for payment links."),
        attr("invite_link_template", AttributeType.STRING, *_OPT, description="A template for invite links."),
    ),
)


class StoreUpdateInput(WireModel):
    name: str | None = None
    default_currency_code: str | None = None
    currencies: list[str] | None = None
    swap_link_template: str | None = None
    payment_link_template: str | None = None
    invite_link_template: str | None = None


class CurrencyRef(RemoteModel):
    code: str


class Store(RemoteModel):
    id: str
    name: str
    default_currency_code: str
    currencies: list[CurrencyRef] | None = None
    swap_link_template: str | None = None
    payment_link_template: str | None = None
    invite_link_template: str | None = None


class StoreCodec(ModelCodec):
    label = "store"
    envelope = "store"
    create_model = StoreUpdateInput
    update_model = StoreUpdateInput
    remote_model = Store

    def encode_delete(self, state: Mapping[str, Any]) -> dict[str, Any]:
        # null explícito: un campo omitido dejaría la plantilla como estaba.
        return {name: None for name in TEMPLATE_FIELDS}

    def to_attributes(self, remote: Store) -> dict[str, Any]:
        return {
            "id": remote.id,
            "name": remote.name,
            "default_currency_code": remote.default_currency_code,
            "currencies": extract_ids(remote.currencies, lambda c: c.code),
            "swap_link_template": remote.swap_link_template,
            "payment_link_template": remote.payment_link_template,
            "invite_link_template": remote.invite_link_template,
        }


STORE = ResourceKind(
    name="store",
    label="store",
    schema=SCHEMA,
    codec=StoreCodec(),
    endpoints=SingletonEndpoints("/admin/store"),
)
