"""Catalog submission value objects.

A ``ProductSubmission`` is built once per request and never persisted.
Option values and variants correspond positionally: ``option_values[i]``
of every variant belongs to ``options[i]``.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Image:
    """Image to attach as product media."""

    src: str
    alt: str | None = None


@dataclass(frozen=True)
class Option:
    """Declared product option and the values legal at its position."""

    name: str
    values: tuple[str, ...] = ()


@dataclass(frozen=True)
class Variant:
    """Variant to create.

    Attributes:
        sku: Stock keeping unit, unique within the submission.
        price: Decimal price as a string, e.g. "19.99".
        option_values: One value per declared option, in option order.
        inventory_quantity: Starting stock, if any.
        image: Image to attach and link to this variant, if any.
    """

    sku: str
    price: str
    option_values: tuple[str, ...]
    inventory_quantity: int | None = None
    image: Image | None = None


@dataclass(frozen=True)
class ProductSubmission:
    """Normalized product submission."""

    title: str
    options: tuple[Option, ...]
    variants: tuple[Variant, ...]
    description: str | None = None
    vendor: str | None = None
    product_type: str | None = None
    tags: tuple[str, ...] = ()
    images: tuple[Image, ...] = field(default_factory=tuple)

    @property
    def option_names(self) -> list[str]:
        """Declared option names in order."""
        return [option.name for option in self.options]

    def values_at(self, position: int) -> list[str]:
        """Distinct variant values at an option position, first appearance first.

        Args:
            position: Option index.

        Returns:
            Values in the order they first appear across variants.
        """
        seen: dict[str, None] = {}
        for variant in self.variants:
            if position < len(variant.option_values):
                seen.setdefault(variant.option_values[position], None)
        return list(seen)

    def image_variants(self) -> list[Variant]:
        """Variants that declared an image, in submission order."""
        return [v for v in self.variants if v.image is not None and v.image.src]

    def media_images(self) -> list[Image]:
        """Images to attach, in attachment order.

        Variant images come first, in variant order, so that the n-th
        attached media belongs to the n-th image-bearing variant. Product
        level images follow unless their source is already attached.
        """
        images = [v.image for v in self.image_variants() if v.image is not None]
        attached = {image.src for image in images}
        for image in self.images:
            if image.src and image.src not in attached:
                images.append(image)
                attached.add(image.src)
        return images
