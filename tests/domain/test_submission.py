"""Tests for submission value objects."""

from provisioner.domain.submission import Image, Option, ProductSubmission, Variant


def _submission(*variants: Variant, images: tuple[Image, ...] = ()) -> ProductSubmission:
    return ProductSubmission(
        title="Mug",
        options=(Option(name="Size"), Option(name="Color")),
        variants=variants,
        images=images,
    )


class TestValuesAt:
    """Tests for distinct per-position values."""

    def test_first_appearance_order(self) -> None:
        """Values keep the order in which variants first use them."""
        submission = _submission(
            Variant(sku="A", price="1.00", option_values=("M", "Blue")),
            Variant(sku="B", price="1.00", option_values=("S", "Blue")),
            Variant(sku="C", price="1.00", option_values=("M", "Red")),
        )
        assert submission.values_at(0) == ["M", "S"]
        assert submission.values_at(1) == ["Blue", "Red"]

    def test_short_variant_contributes_nothing(self) -> None:
        """A variant without a value at a position is skipped there."""
        submission = _submission(Variant(sku="A", price="1.00", option_values=("M",)))
        assert submission.values_at(1) == []

    def test_option_names(self) -> None:
        """Option names follow declaration order."""
        assert _submission().option_names == ["Size", "Color"]


class TestMediaImages:
    """Tests for attachment ordering."""

    def test_variant_images_come_first(self) -> None:
        """Variant images precede product images."""
        submission = _submission(
            Variant(sku="A", price="1.00", option_values=("M",), image=Image(src="a.png")),
            Variant(sku="B", price="1.00", option_values=("S",)),
            Variant(sku="C", price="1.00", option_values=("L",), image=Image(src="c.png")),
            images=(Image(src="hero.png"),),
        )
        assert [i.src for i in submission.media_images()] == ["a.png", "c.png", "hero.png"]
        assert [v.sku for v in submission.image_variants()] == ["A", "C"]

    def test_product_image_already_attached_is_skipped(self) -> None:
        """A product image repeating a variant image is attached once."""
        submission = _submission(
            Variant(sku="A", price="1.00", option_values=("M",), image=Image(src="a.png")),
            images=(Image(src="a.png"), Image(src="b.png"), Image(src="b.png")),
        )
        assert [i.src for i in submission.media_images()] == ["a.png", "b.png"]

    def test_empty_source_is_not_an_image(self) -> None:
        """A variant image without a source does not count."""
        submission = _submission(
            Variant(sku="A", price="1.00", option_values=("M",), image=Image(src="")),
        )
        assert submission.image_variants() == []
        assert submission.media_images() == []
