"""API schemas for the provisioning API.

Pydantic models for request parsing and response serialization. Requests
are only shape-checked here; submissions are expected to arrive valid.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator

from provisioner.domain.remote import ProvisioningResult
from provisioner.domain.submission import Image, Option, ProductSubmission, Variant


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[Any] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


# ============================================================================
# Submission Schemas
# ============================================================================


def _value_name(value: Any) -> str:
    """Accept an option value as a plain string or a ``{"name": ...}`` object."""
    if isinstance(value, dict):
        return str(value.get("name") or "")
    return str(value)


class ImageSchema(BaseModel):
    """Image reference."""

    src: str = Field(..., min_length=1, description="Publicly reachable image URL")
    alt: str | None = Field(default=None, max_length=255, description="Alt text")

    def to_domain(self) -> Image:
        return Image(src=self.src, alt=self.alt)


class OptionSchema(BaseModel):
    """Declared option with its legal values."""

    name: str = Field(..., min_length=1, max_length=255)
    values: list[str] = Field(default_factory=list)

    @field_validator("values", mode="before")
    @classmethod
    def normalize_values(cls, values: Any) -> list[str]:
        """Flatten ``{"name": ...}`` value objects and drop duplicates."""
        names = [_value_name(v) for v in values or []]
        return list(dict.fromkeys(n for n in names if n))


class VariantSchema(BaseModel):
    """Variant to create."""

    sku: str = Field(..., min_length=1, max_length=100)
    price: str = Field(..., description="Decimal price, e.g. '19.99'")
    option_values: list[str] = Field(
        ..., min_length=1, description="One value per declared option, in option order"
    )
    inventory_quantity: int | None = Field(default=None, ge=0)
    image: ImageSchema | None = None

    @field_validator("price", mode="before")
    @classmethod
    def price_as_string(cls, price: Any) -> Any:
        """Keep numeric prices as their decimal string."""
        return price if price is None else str(price)

    def to_domain(self) -> Variant:
        return Variant(
            sku=self.sku,
            price=self.price,
            option_values=tuple(self.option_values),
            inventory_quantity=self.inventory_quantity,
            image=self.image.to_domain() if self.image and self.image.src else None,
        )


class ProductCreateRequest(BaseModel):
    """Request to provision a product."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(
        default=None,
        validation_alias=AliasChoices("description", "body_html"),
        description="Product description (HTML)",
    )
    vendor: str | None = Field(default=None, max_length=255)
    product_type: str | None = Field(default=None, max_length=255)
    tags: list[str] = Field(default_factory=list)
    options: list[OptionSchema] = Field(..., min_length=1)
    variants: list[VariantSchema] = Field(..., min_length=1)
    images: list[ImageSchema] = Field(default_factory=list)

    @field_validator("options", mode="before")
    @classmethod
    def normalize_options(cls, options: Any) -> Any:
        """Accept plain option names as well as ``{name, values}`` objects."""
        if not isinstance(options, list):
            return options
        normalized = []
        for position, option in enumerate(options):
            if isinstance(option, str):
                normalized.append({"name": option, "values": []})
            elif isinstance(option, dict) and not option.get("name"):
                normalized.append({**option, "name": f"Option{position + 1}"})
            else:
                normalized.append(option)
        return normalized

    def to_submission(self) -> ProductSubmission:
        """Convert to the domain submission."""
        return ProductSubmission(
            title=self.title,
            description=self.description,
            vendor=self.vendor,
            product_type=self.product_type,
            tags=tuple(self.tags),
            options=tuple(Option(name=o.name, values=tuple(o.values)) for o in self.options),
            variants=tuple(v.to_domain() for v in self.variants),
            images=tuple(i.to_domain() for i in self.images if i.src),
        )


# ============================================================================
# Result Schemas
# ============================================================================


class RemoteOptionSchema(BaseModel):
    """Created product option."""

    id: str
    name: str


class RemoteVariantSchema(BaseModel):
    """Created variant."""

    id: str
    sku: str | None = None
    inventory_item_id: str | None = None


class RemoteMediaSchema(BaseModel):
    """Created media record."""

    id: str
    alt: str | None = None
    status: str | None = None


class MediaLinkSchema(BaseModel):
    """Variant linked to media."""

    sku: str
    variant_id: str
    media_id: str


class ProductCreateResponse(BaseModel):
    """Response for a provisioned product."""

    success: bool = True
    message: str = "Product created successfully."
    product_id: str = Field(..., description="Remote product gid")
    handle: str | None = None
    location_id: str | None = Field(
        default=None, description="Location starting inventory was bound to"
    )
    options: list[RemoteOptionSchema] = Field(default_factory=list)
    variants: dict[str, RemoteVariantSchema] = Field(
        default_factory=dict, description="Created variants keyed by SKU"
    )
    media: list[RemoteMediaSchema] = Field(default_factory=list)
    linked_media: list[MediaLinkSchema] = Field(default_factory=list)
    inventory_set: bool = False

    @classmethod
    def from_result(cls, result: ProvisioningResult) -> "ProductCreateResponse":
        """Build from a provisioning result."""
        return cls(
            product_id=result.product_id,
            handle=result.product.handle,
            location_id=result.location_id,
            options=[RemoteOptionSchema(id=o.id, name=o.name) for o in result.product.options],
            variants={
                sku: RemoteVariantSchema(
                    id=v.id, sku=v.sku, inventory_item_id=v.inventory_item_id
                )
                for sku, v in result.variants.items()
            },
            media=[RemoteMediaSchema(id=m.id, alt=m.alt, status=m.status) for m in result.media],
            linked_media=[
                MediaLinkSchema(
                    sku=link.sku, variant_id=link.variant_id, media_id=link.media_id
                )
                for link in result.links
            ],
            inventory_set=result.inventory_set,
        )


class ProductSummarySchema(BaseModel):
    """Existing product as listed."""

    id: str
    title: str | None = None
    handle: str | None = None
    status: str | None = None
    vendor: str | None = None
    product_type: str | None = Field(
        default=None, validation_alias=AliasChoices("product_type", "productType")
    )


class ProductsListResponse(BaseModel):
    """List of existing products."""

    products: list[ProductSummarySchema]
    total: int
