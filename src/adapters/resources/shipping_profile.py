"""Recurso Medusa: shipping profile."""

from __future__ import annotations

from adapters.resources.base import CollectionEndpoints, ModelCodec, RemoteModel, WireModel
from core.domain.schema import AttributeType, Modifier, ResourceSchema, attr, id_attribute
from core.interfaces.resource import ResourceKind

SCHEMA = ResourceSchema(
    type_name="medusa_shipping_profile",
    description="A shipping profile is used to group products that can be shipped in the same manner.",
    attributes=(
        id_attribute("shipping profile"),
        attr("name", AttributeType.STRING, Modifier.REQUIRED, description="The name of the shipping profile."),
        attr("type", AttributeType.STRING, Modifier.REQUIRED, description="The type of the shipping profile."),
    ),
)


class ShippingProfileCreateInput(WireModel):
    name: str
    type: str


class ShippingProfileUpdateInput(WireModel):
    name: str | None = None
    type: str | None = None


class ShippingProfile(RemoteModel):
    id: str
    name: str
    type: str


class ShippingProfileCodec(ModelCodec):
    label = "shipping_profile"
    envelope = "shipping_profile"
    create_model = ShippingProfileCreateInput
    update_model = ShippingProfileUpdateInput
    remote_model = ShippingProfile


SHIPPING_PROFILE = ResourceKind(
    name="shipping_profile",
    label="shipping profile",
    schema=SCHEMA,
    codec=ShippingProfileCodec(),
    endpoints=CollectionEndpoints("/admin/shipping-profiles"),
)
