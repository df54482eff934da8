"""Recurso Medusa: sales channel (canal donde se venden productos)."""

from __future__ import annotations

from adapters.resources.base import CollectionEndpoints, ModelCodec, RemoteModel, WireModel
from core.domain.schema import AttributeType, Modifier, ResourceSchema, attr, id_attribute
from core.interfaces.resource import ResourceKind

SCHEMA = ResourceSchema(
    type_name="medusa_sales_channel",
    description="A sales channel indicates a channel where products can be sold in.",
    attributes=(
        id_attribute("sales channel"),
        attr("name", AttributeType.STRING, Modifier.REQUIRED, description="The name of the sales channel."),
        attr(
            "description",
            AttributeType.STRING,
            Modifier.REQUIRED,
            description="The description of the sales channel.",
        ),
        attr(
            "is_disabled",
            AttributeType.BOOL,
            Modifier.OPTIONAL,
            Modifier.COMPUTED,
            description="Whether the sales channel is disabled.",
        ),
    ),
)


class SalesChannelCreateInput(WireModel):
    name: str
    description: str | None = None
    is_disabled: bool | None = None


class SalesChannelUpdateInput(WireModel):
    name: str | None = None
    description: str | None = None
    is_disabled: bool | None = None


class SalesChannel(RemoteModel):
    id: str
    name: str
    description: str | None = None
    is_disabled: bool = False


class SalesChannelCodec(ModelCodec):
    label = "sales_channel"
    envelope = "sales_channel"
    create_model = SalesChannelCreateInput
    update_model = SalesChannelUpdateInput
    remote_model = SalesChannel


SALES_CHANNEL = ResourceKind(
    name="sales_channel",
    label="sales channel",
    schema=SCHEMA,
    codec=SalesChannelCodec(),
    endpoints=CollectionEndpoints("/admin/sales-channels"),
)
