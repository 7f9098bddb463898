"""Shopify catalog provisioning stages.

Each stage issues its GraphQL calls through a shop-bound connection and
reports its outcome as a ``StageResult``.
"""

from provisioner.catalog.connection import ShopConnection
from provisioner.catalog.inventory import InventorySetter
from provisioner.catalog.locations import LocationProfile, LocationResolver
from provisioner.catalog.media import MediaAttacher, VariantMediaLinker
from provisioner.catalog.options import OptionIndex, OptionValueLink
from provisioner.catalog.products import ProductCreator, ProductLister, ProductRemover
from provisioner.catalog.variants import VariantProvisioner

__all__ = [
    # Connection
    "ShopConnection",
    # Stages
    "InventorySetter",
    "LocationProfile",
    "LocationResolver",
    "MediaAttacher",
    "OptionIndex",
    "OptionValueLink",
    "ProductCreator",
    "ProductLister",
    "ProductRemover",
    "VariantMediaLinker",
    "VariantProvisioner",
]
