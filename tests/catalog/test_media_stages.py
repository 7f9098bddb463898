"""Tests for media attachment and variant linking."""

import pytest

from provisioner.catalog.connection import ShopConnection
from provisioner.catalog.media import MediaAttacher, VariantMediaLinker, build_media_input
from provisioner.domain.exceptions import ValidationError
from provisioner.domain.remote import MediaLink, RemoteMedia, RemoteVariant
from provisioner.domain.submission import Image, Option, ProductSubmission, Variant
from shopify_fakes import PRODUCT_ID, FakeShopify, media_appended, media_created, user_error


@pytest.fixture
def three_image_submission() -> ProductSubmission:
    """Four variants, three of which declare an image."""
    return ProductSubmission(
        title="Mug",
        options=(Option(name="Color", values=("Red", "Blue", "Green", "Black")),),
        variants=(
            Variant(sku="V1", price="5.00", option_values=("Red",), image=Image(src="v1.png")),
            Variant(sku="V2", price="5.00", option_values=("Blue",), image=Image(src="v2.png")),
            Variant(sku="V3", price="5.00", option_values=("Green",)),
            Variant(sku="V4", price="5.00", option_values=("Black",), image=Image(src="v4.png")),
        ),
    )


@pytest.fixture
def created_variants() -> dict[str, RemoteVariant]:
    """Remote variants for V1..V4."""
    return {
        sku: RemoteVariant(id=f"gid://shopify/ProductVariant/{n}", sku=sku)
        for n, sku in enumerate(["V1", "V2", "V3", "V4"], start=1)
    }


class TestMediaAttacher:
    """Tests for MediaAttacher."""

    def test_build_media_input(self) -> None:
        """Images become IMAGE media inputs."""
        assert build_media_input([Image(src="a.png", alt="A")]) == [
            {"mediaContentType": "IMAGE", "originalSource": "a.png", "alt": "A"}
        ]

    @pytest.mark.asyncio
    async def test_attach(self, fake_shopify: FakeShopify, connection: ShopConnection) -> None:
        """Created media come back in request order."""
        fake_shopify.responses["productCreateMedia"] = media_created(2)

        result = await MediaAttacher(connection).attach(
            PRODUCT_ID, [Image(src="a.png", alt="A"), Image(src="b.png")]
        )

        media = result.unwrap()
        assert [m.id for m in media] == ["gid://shopify/MediaImage/1", "gid://shopify/MediaImage/2"]
        assert media[0].alt == "A"

    @pytest.mark.asyncio
    async def test_null_media_entry_keeps_position(
        self,
        fake_shopify: FakeShopify,
        connection: ShopConnection,
        three_image_submission: ProductSubmission,
        created_variants: dict[str, RemoteVariant],
    ) -> None:
        """A null media entry still occupies its slot when pairing."""
        fake_shopify.responses["productCreateMedia"] = {
            "productCreateMedia": {
                "media": [None, {"id": "m2", "alt": None, "status": "UPLOADED"}],
                "mediaUserErrors": [],
            }
        }

        result = await MediaAttacher(connection).attach(
            PRODUCT_ID, [Image(src="v1.png"), Image(src="v2.png")]
        )

        media = result.unwrap()
        assert [m.id for m in media] == ["", "m2"]
        links = VariantMediaLinker(connection).pair(three_image_submission, created_variants, media)
        assert [(link.sku, link.media_id) for link in links] == [("V2", "m2")]

    @pytest.mark.asyncio
    async def test_no_images_makes_no_call(
        self, fake_shopify: FakeShopify, connection: ShopConnection
    ) -> None:
        """Nothing is sent when there are no images."""
        result = await MediaAttacher(connection).attach(PRODUCT_ID, [])

        assert result.unwrap() == []
        assert fake_shopify.calls == []

    @pytest.mark.asyncio
    async def test_media_user_errors(
        self, fake_shopify: FakeShopify, connection: ShopConnection
    ) -> None:
        """Media field errors become a ValidationError result."""
        fake_shopify.responses["productCreateMedia"] = user_error(
            "productCreateMedia", "Image URL is invalid", ["media", "0", "originalSource"]
        )

        result = await MediaAttacher(connection).attach(PRODUCT_ID, [Image(src="nope")])

        assert isinstance(result.error, ValidationError)
        assert result.error.operation == "productCreateMedia"


class TestVariantMediaLinker:
    """Tests for VariantMediaLinker."""

    def test_pair_by_position(
        self,
        connection: ShopConnection,
        three_image_submission: ProductSubmission,
        created_variants: dict[str, RemoteVariant],
    ) -> None:
        """The n-th image-bearing variant gets the n-th media record."""
        media = [RemoteMedia(id="m1"), RemoteMedia(id="m2"), RemoteMedia(id="m3")]

        links = VariantMediaLinker(connection).pair(three_image_submission, created_variants, media)

        assert [(link.sku, link.media_id) for link in links] == [
            ("V1", "m1"),
            ("V2", "m2"),
            ("V4", "m3"),
        ]

    def test_pair_skips_missing_variant_and_media_id(
        self,
        connection: ShopConnection,
        three_image_submission: ProductSubmission,
        created_variants: dict[str, RemoteVariant],
    ) -> None:
        """Pairs without a created variant or a media id are skipped."""
        del created_variants["V1"]
        media = [RemoteMedia(id="m1"), RemoteMedia(id=""), RemoteMedia(id="m3")]

        links = VariantMediaLinker(connection).pair(three_image_submission, created_variants, media)

        assert [(link.sku, link.media_id) for link in links] == [("V4", "m3")]

    @pytest.mark.asyncio
    async def test_fewer_media_than_images(
        self,
        fake_shopify: FakeShopify,
        connection: ShopConnection,
        three_image_submission: ProductSubmission,
        created_variants: dict[str, RemoteVariant],
    ) -> None:
        """Trailing image-bearing variants stay unlinked without an error."""
        fake_shopify.responses["productVariantAppendMedia"] = media_appended
        media = [RemoteMedia(id="m1"), RemoteMedia(id="m2")]

        result = await VariantMediaLinker(connection).link(
            PRODUCT_ID, three_image_submission, created_variants, media
        )

        assert result.unwrap() == [
            MediaLink(sku="V1", variant_id="gid://shopify/ProductVariant/1", media_id="m1"),
            MediaLink(sku="V2", variant_id="gid://shopify/ProductVariant/2", media_id="m2"),
        ]
        calls = fake_shopify.calls_to("productVariantAppendMedia")
        assert len(calls) == 2
        assert calls[0].variables == {
            "productId": PRODUCT_ID,
            "variantMedia": [
                {"variantId": "gid://shopify/ProductVariant/1", "mediaIds": ["m1"]}
            ],
        }

    @pytest.mark.asyncio
    async def test_no_media_makes_no_call(
        self,
        fake_shopify: FakeShopify,
        connection: ShopConnection,
        three_image_submission: ProductSubmission,
        created_variants: dict[str, RemoteVariant],
    ) -> None:
        """Nothing is linked when no media were attached."""
        result = await VariantMediaLinker(connection).link(
            PRODUCT_ID, three_image_submission, created_variants, []
        )

        assert result.unwrap() == []
        assert fake_shopify.calls == []

    @pytest.mark.asyncio
    async def test_user_errors_stop_linking(
        self,
        fake_shopify: FakeShopify,
        connection: ShopConnection,
        three_image_submission: ProductSubmission,
        created_variants: dict[str, RemoteVariant],
    ) -> None:
        """The first refused link fails the stage."""
        fake_shopify.responses["productVariantAppendMedia"] = user_error(
            "productVariantAppendMedia", "Media is not ready"
        )
        media = [RemoteMedia(id="m1"), RemoteMedia(id="m2")]

        result = await VariantMediaLinker(connection).link(
            PRODUCT_ID, three_image_submission, created_variants, media
        )

        assert isinstance(result.error, ValidationError)
        assert len(fake_shopify.calls_to("productVariantAppendMedia")) == 1
