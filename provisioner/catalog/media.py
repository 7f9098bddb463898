"""Media attachment and variant linking.

Media records are matched to variants by position: the n-th variant that
declared an image receives the n-th media record the attach call returned.
Shopify echoes no client key for created media, so this ordering is the
contract between the two stages. When fewer records come back than were
requested, the trailing image-bearing variants are left unlinked.
"""

from typing import Any

import structlog

from provisioner.catalog.connection import ShopConnection, user_errors
from provisioner.catalog.documents import PRODUCT_CREATE_MEDIA, VARIANT_APPEND_MEDIA
from provisioner.domain.exceptions import ValidationError
from provisioner.domain.remote import MediaLink, RemoteMedia, RemoteVariant
from provisioner.domain.results import StageResult
from provisioner.domain.submission import Image, ProductSubmission

logger = structlog.get_logger()


def build_media_input(images: list[Image]) -> list[dict[str, Any]]:
    """Build ``CreateMediaInput`` entries for images."""
    return [
        {
            "mediaContentType": "IMAGE",
            "originalSource": image.src,
            "alt": image.alt,
        }
        for image in images
    ]


class MediaAttacher:
    """Attaches images to a product as media."""

    def __init__(self, connection: ShopConnection) -> None:
        self.connection = connection

    async def attach(
        self, product_id: str, images: list[Image]
    ) -> StageResult[list[RemoteMedia]]:
        """Submit ``productCreateMedia``.

        Args:
            product_id: Remote product gid.
            images: Images in attachment order.

        Returns:
            StageResult with created media in the order images were sent.
        """
        if not images:
            return StageResult.ok([])

        data = await self.connection.execute(
            PRODUCT_CREATE_MEDIA,
            {"productId": product_id, "media": build_media_input(images)},
        )
        payload = data.get("productCreateMedia") or {}

        errors = user_errors(payload, key="mediaUserErrors")
        if errors:
            return StageResult.failed(ValidationError("productCreateMedia", errors))

        media = [RemoteMedia.from_api_response(m or {}) for m in payload.get("media") or []]
        logger.info(
            "Attached media",
            shop=self.connection.shop_domain,
            product_id=product_id,
            requested=len(images),
            attached=sum(1 for m in media if m.id),
        )
        return StageResult.ok(media)


class VariantMediaLinker:
    """Links attached media onto the variants that declared them."""

    def __init__(self, connection: ShopConnection) -> None:
        self.connection = connection

    def pair(
        self,
        submission: ProductSubmission,
        variants: dict[str, RemoteVariant],
        media: list[RemoteMedia],
    ) -> list[MediaLink]:
        """Pair image-bearing variants with media by position.

        Args:
            submission: Product submission.
            variants: Created variants keyed by SKU.
            media: Attached media in attachment order.

        Returns:
            Links to create, in submission order.
        """
        links = []
        for variant, record in zip(submission.image_variants(), media):
            remote = variants.get(variant.sku)
            if remote is None or not record.id:
                continue
            links.append(MediaLink(sku=variant.sku, variant_id=remote.id, media_id=record.id))
        return links

    async def link(
        self,
        product_id: str,
        submission: ProductSubmission,
        variants: dict[str, RemoteVariant],
        media: list[RemoteMedia],
    ) -> StageResult[list[MediaLink]]:
        """Submit one ``productVariantAppendMedia`` per variant/media pair.

        Returns:
            StageResult with the links created.
        """
        links = self.pair(submission, variants, media)

        for link in links:
            data = await self.connection.execute(
                VARIANT_APPEND_MEDIA,
                {
                    "productId": product_id,
                    "variantMedia": [
                        {"variantId": link.variant_id, "mediaIds": [link.media_id]}
                    ],
                },
            )
            errors = user_errors(data.get("productVariantAppendMedia"))
            if errors:
                return StageResult.failed(ValidationError("productVariantAppendMedia", errors))

        logger.info(
            "Linked variant media",
            shop=self.connection.shop_domain,
            product_id=product_id,
            linked=len(links),
            image_variants=len(submission.image_variants()),
        )
        return StageResult.ok(links)
