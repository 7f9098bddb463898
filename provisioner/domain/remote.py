"""Records returned by the Shopify Admin API.

Only the identifiers the current pipeline run needs are kept; nothing here
is cached across requests.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RemoteOption:
    """Product option as created remotely."""

    id: str
    name: str


@dataclass(frozen=True)
class RemoteProduct:
    """Product as created remotely."""

    id: str
    handle: str | None
    options: tuple[RemoteOption, ...] = ()

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "RemoteProduct":
        """Create from a ``productCreate.product`` payload."""
        return cls(
            id=data["id"],
            handle=data.get("handle"),
            options=tuple(
                RemoteOption(id=o["id"], name=o["name"])
                for o in data.get("options") or []
                if o.get("id") and o.get("name")
            ),
        )


@dataclass(frozen=True)
class RemoteVariant:
    """Variant as created remotely."""

    id: str
    sku: str | None
    inventory_item_id: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "RemoteVariant":
        """Create from a ``productVariantsBulkCreate.productVariants`` entry."""
        inventory_item = data.get("inventoryItem") or {}
        return cls(
            id=data["id"],
            sku=data.get("sku"),
            inventory_item_id=inventory_item.get("id"),
        )


@dataclass(frozen=True)
class RemoteMedia:
    """Media as created remotely."""

    id: str
    alt: str | None = None
    status: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "RemoteMedia":
        """Create from a ``productCreateMedia.media`` entry."""
        # Keep entries without an id so positions still line up with images
        return cls(id=data.get("id") or "", alt=data.get("alt"), status=data.get("status"))


@dataclass(frozen=True)
class MediaLink:
    """A variant linked to a media record."""

    sku: str
    variant_id: str
    media_id: str


@dataclass
class ProvisioningResult:
    """Everything one pipeline run created."""

    product: RemoteProduct
    location_id: str | None = None
    variants: dict[str, RemoteVariant] = field(default_factory=dict)
    media: list[RemoteMedia] = field(default_factory=list)
    links: list[MediaLink] = field(default_factory=list)
    inventory_set: bool = False

    @property
    def product_id(self) -> str:
        """Remote product id."""
        return self.product.id
