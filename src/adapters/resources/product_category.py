"""Recurso Medusa: product category.

Un producto puede estar en más de una categoría; las categorías forman un
árbol vía `parent_category_id`.
"""

from __future__ import annotations

from adapters.resources.base import CollectionEndpoints, ModelCodec, RemoteModel, WireModel
from core.domain.schema import AttributeType, Modifier, ResourceSchema, attr, id_attribute
from core.interfaces.resource import ResourceKind

_OPT = (Modifier.OPTIONAL, Modifier.COMPUTED)

SCHEMA = ResourceSchema(
    type_name="medusa_product_category",
    description=(
        "Products can be categorized into categories. "
        "A product can be added into more than one category."
    ),
    attributes=(
        id_attribute("product category"),
        attr("name", AttributeType.STRING, Modifier.REQUIRED, description="The name of the product category."),
        attr("description", AttributeType.STRING, *_OPT, description="The description of the product category."),
        attr("handle", AttributeType.STRING, *_OPT, description="The handle of the product category."),
        attr(
            "is_internal",
            AttributeType.BOOL,
            *_OPT,
            description="If set to true, the product category will only be available to admins.",
        ),
        attr(
            "is_active",
            AttributeType.BOOL,
            *_OPT,
            description="If set to false, the product category will not be available in the storefront.",
        ),
        attr(
            "parent_category_id",
            AttributeType.STRING,
            *_OPT,
            description="The id of the parent product category.",
        ),
    ),
)


class ProductCategoryCreateInput(WireModel):
    name: str
    description: str | None = None
    handle: str | None = None
    is_internal: bool | None = None
    is_active: bool | None = None
    parent_category_id: str | None = None


class ProductCategoryUpdateInput(WireModel):
    name: str | None = None
    description: str | None = None
    handle: str | None = None
    is_internal: bool | None = None
    is_active: bool | None = None
    parent_category_id: str | None = None


class ProductCategory(RemoteModel):
    id: str
    name: str
    description: str | None = None
    handle: str
    is_internal: bool = False
    is_active: bool = False
    parent_category_id: str | None = None


class ProductCategoryCodec(ModelCodec):
    label = "product_category"
    envelope = "product_category"
    create_model = ProductCategoryCreateInput
    update_model = ProductCategoryUpdateInput
    remote_model = ProductCategory


PRODUCT_CATEGORY = ResourceKind(
    name="product_category",
    label="product category",
    schema=SCHEMA,
    codec=ProductCategoryCodec(),
    endpoints=CollectionEndpoints("/admin/product-categories"),
)
