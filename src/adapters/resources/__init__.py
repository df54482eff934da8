"""Recursos Medusa gestionables.

Por qué un paquete:
- Agrupa módulos por tipo de entidad (region, store, ...).
- Cada módulo expone un `core.interfaces.resource.ResourceKind` listo para el
  controlador genérico del ciclo de vida.
"""

from adapters.resources.customer_group import CUSTOMER_GROUP
from adapters.resources.product_category import PRODUCT_CATEGORY
from adapters.resources.product_collection import PRODUCT_COLLECTION
from adapters.resources.region import REGION
from adapters.resources.sales_channel import SALES_CHANNEL
from adapters.resources.shipping_profile import SHIPPING_PROFILE
from adapters.resources.store import STORE
from core.interfaces.resource import ResourceKind

ALL_RESOURCES: tuple[ResourceKind, ...] = (
    REGION,
    SALES_CHANNEL,
    PRODUCT_COLLECTION,
    PRODUCT_CATEGORY,
    SHIPPING_PROFILE,
    CUSTOMER_GROUP,
    STORE,
)

RESOURCES_BY_NAME: dict[str, ResourceKind] = {kind.name: kind for kind in ALL_RESOURCES}

__all__ = [
	"ALL_RESOURCES",
	"CUSTOMER_GROUP",
	"PRODUCT_CATEGORY",
	"PRODUCT_COLLECTION",
	"REGION",
	"RESOURCES_BY_NAME",
	"SALES_CHANNEL",
	"SHIPPING_PROFILE",
	"STORE",
]
