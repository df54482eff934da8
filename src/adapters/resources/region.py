"""Recurso Medusa: region.

Las regiones son países o zonas geográficas en las que opera la tienda.
Particularidad del wire format:
- La API recibe listas de ids (`payment_providers`, `countries`) pero
  devuelve objetos anidados; al decodificar se vuelven a reducir a ids.
"""

from __future__ import annotations

from typing import Any

from adapters.resources.base import (
    CollectionEndpoints,
    ModelCodec,
    RemoteModel,
    WireModel,
    extract_ids,
)
from core.domain.schema import AttributeType, Modifier, ResourceSchema, attr, id_attribute
from core.interfaces.resource import ResourceKind

SCHEMA = ResourceSchema(
    type_name="medusa_region",
    description="Regions are different countries or geographical regions that the commerce store serves customers in.",
    attributes=(
        id_attribute("region"),
        attr("name", AttributeType.STRING, Modifier.REQUIRED, description="The name of the region."),
        attr(
            "currency_code",
            AttributeType.STRING,
            Modifier.REQUIRED,
            description="The 3 character ISO currency code to use in the region.",
        ),
        attr("tax_rate", AttributeType.NUMBER, Modifier.REQUIRED, description="The tax rate to use in the region."),
        attr(
            "payment_providers",
            AttributeType.LIST_OF_STRING,
            Modifier.REQUIRED,
            description="A list of payment provider ids that can be used in the region.",
        ),
        attr(
            "fulfillment_providers",
            AttributeType.LIST_OF_STRING,
            Modifier.REQUIRED,
            description="A list of fulfillment provider ids that can be used in the region.",
        ),
        attr(
            "countries",
            AttributeType.LIST_OF_STRING,
            Modifier.REQUIRED,
            description="A list of countries' 2 ISO characters that should be included in the region.",
        ),
        attr("tax_code", AttributeType.STRING, Modifier.OPTIONAL, description="The tax code of the region."),
        attr(
            "includes_tax",
            AttributeType.BOOL,
            Modifier.OPTIONAL,
            description="Whether taxes are included in the prices of the region.",
        ),
    ),
)


class RegionCreateInput(WireModel):
    name: str
    currency_code: str
    tax_rate: float
    payment_providers: list[str]
    fulfillment_providers: list[str]
    countries: list[str]
    tax_code: str | None = None
    includes_tax: bool | None = None


class RegionUpdateInput(WireModel):
    name: str | None = None
    currency_code: str | None = None
    tax_rate: float | None = None
    payment_providers: list[str] | None = None
    fulfillment_providers: list[str] | None = None
    countries: list[str] | None = None
    tax_code: str | None = None
    includes_tax: bool | None = None


class ProviderRef(RemoteModel):
    id: str


class CountryRef(RemoteModel):
    iso_2: str


class Region(RemoteModel):
    id: str
    name: str
    currency_code: str
    tax_rate: float
    payment_providers: list[ProviderRef] | None = None
    fulfillment_providers: list[ProviderRef] | None = None
    countries: list[CountryRef] | None = None
    tax_code: str | None = None
    includes_tax: bool | None = None


class RegionCodec(ModelCodec):
    label = "region"
    envelope = "region"
    create_model = RegionCreateInput
    update_model = RegionUpdateInput
    remote_model = Region

    def to_attributes(self, remote: Region) -> dict[str, Any]:
        return {
            "id": remote.id,
            "name": remote.name,
            "currency_code": remote.currency_code,
            "tax_rate": remote.tax_rate,
            "payment_providers": extract_ids(remote.payment_providers, lambda p: p.id),
            "fulfillment_providers": extract_ids(remote.fulfillment_providers, lambda p: p.id),
            "countries": extract_ids(remote.countries, lambda c: c.iso_2),
            "tax_code": remote.tax_code,
            "includes_tax": remote.includes_tax,
        }


REGION = ResourceKind(
    name="region",
    label="region",
    schema=SCHEMA,
    codec=RegionCodec(),
    endpoints=CollectionEndpoints("/admin/regions"),
)
