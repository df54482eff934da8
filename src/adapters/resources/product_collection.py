"""Recurso Medusa: product collection.

Nota:
- `handle` lo genera el servidor a partir del título si no se declara.
"""

from __future__ import annotations

from adapters.resources.base import CollectionEndpoints, ModelCodec, RemoteModel, WireModel
from core.domain.schema import AttributeType, Modifier, ResourceSchema, attr, id_attribute
from core.interfaces.resource import ResourceKind

SCHEMA = ResourceSchema(
    type_name="medusa_product_collection",
    description=(
        "A product collection is used to organize products for different purposes "
        "such as marketing or discount purposes."
    ),
    attributes=(
        id_attribute("product collection"),
        attr("title", AttributeType.STRING, Modifier.REQUIRED, description="The title of the product collection."),
        attr(
            "handle",
            AttributeType.STRING,
            Modifier.OPTIONAL,
            Modifier.COMPUTED,
            description="The handle of the product collection.",
        ),
    ),
)


class ProductCollectionCreateInput(WireModel):
    title: str
    handle: str | None = None


class ProductCollectionUpdateInput(WireModel):
    title: str | None = None
    handle: str | None = None


class ProductCollection(RemoteModel):
    id: str
    title: str
    handle: str | None = None


class ProductCollectionCodec(ModelCodec):
    label = "product_collection"
    envelope = "collection"
    create_model = ProductCollectionCreateInput
    update_model = ProductCollectionUpdateInput
    remote_model = ProductCollection


PRODUCT_COLLECTION = ResourceKind(
    name="product_collection",
    label="product collection",
    schema=SCHEMA,
    codec=ProductCollectionCodec(),
    endpoints=CollectionEndpoints("/admin/collections"),
)
