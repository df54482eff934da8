"""Recurso Medusa: customer group."""

from __future__ import annotations

from adapters.resources.base import CollectionEndpoints, ModelCodec, RemoteModel, WireModel
from core.domain.schema import AttributeType, Modifier, ResourceSchema, attr, id_attribute
from core.interfaces.resource import ResourceKind

SCHEMA = ResourceSchema(
    type_name="medusa_customer_group",
    description=(
        "Customer Groups can be used to organize customers that share similar data "
        "or attributes into dedicated groups."
    ),
    attributes=(
        id_attribute("customer group"),
        attr("name", AttributeType.STRING, Modifier.REQUIRED, description="The name of the customer group."),
    ),
)


class CustomerGroupCreateInput(WireModel):
    name: str


class CustomerGroupUpdateInput(WireModel):
    name: str | None = None


class CustomerGroup(RemoteModel):
    id: str
    name: str


class CustomerGroupCodec(ModelCodec):
    label = "customer_group"
    envelope = "customer_group"
    create_model = CustomerGroupCreateInput
    update_model = CustomerGroupUpdateInput
    remote_model = CustomerGroup


CUSTOMER_GROUP = ResourceKind(
    name="customer_group",
    label="customer group",
    schema=SCHEMA,
    codec=CustomerGroupCodec(),
    endpoints=CollectionEndpoints("/admin/customer-groups"),
)
