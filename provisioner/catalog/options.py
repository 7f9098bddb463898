"""Option value lookup.

Maps each variant's option values to the remote option that owns them.
Ownership is decided by membership: a value belongs to the first declared
option whose value set contains it, so a value legal under two options
always resolves to the earlier one. Values no declared option contains are
dropped from the variant's option links without raising.
"""

from dataclasses import dataclass

import structlog

from provisioner.domain.remote import RemoteProduct
from provisioner.domain.submission import ProductSubmission, Variant

logger = structlog.get_logger()


@dataclass(frozen=True)
class OptionValueLink:
    """A variant's value bound to a remote option."""

    option_name: str
    option_id: str
    value: str

    def to_input(self) -> dict[str, str]:
        """``VariantOptionValueInput`` payload."""
        return {"optionId": self.option_id, "name": self.value}


class OptionIndex:
    """Value → owning option lookup built from the creation response."""

    def __init__(
        self,
        option_ids: dict[str, str],
        value_sets: list[tuple[str, frozenset[str]]],
    ) -> None:
        """Initialize the index.

        Args:
            option_ids: Option name → remote option id.
            value_sets: (option name, legal values) in declared order.
        """
        self.option_ids = option_ids
        self.value_sets = value_sets

    @classmethod
    def build(cls, submission: ProductSubmission, product: RemoteProduct) -> "OptionIndex":
        """Build the index for a submission and its created product.

        A declared option without values uses the values variants supply at
        its position instead.
        """
        option_ids = {option.name: option.id for option in product.options}
        value_sets = []
        for position, option in enumerate(submission.options):
            values = option.values or tuple(submission.values_at(position))
            value_sets.append((option.name, frozenset(values)))
        return cls(option_ids, value_sets)

    def owner_of(self, value: str) -> str | None:
        """Name of the first declared option that contains ``value``."""
        for name, values in self.value_sets:
            if value in values:
                return name
        return None

    def links_for(self, variant: Variant) -> list[OptionValueLink]:
        """Option links for a variant, in the variant's positional order."""
        links = []
        for value in variant.option_values:
            owner = self.owner_of(value)
            option_id = self.option_ids.get(owner) if owner else None
            if option_id is None:
                logger.debug("Dropping unmatched option value", sku=variant.sku, value=value)
                continue
            links.append(OptionValueLink(option_name=owner, option_id=option_id, value=value))
        return links
