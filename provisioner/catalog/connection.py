"""Shop-scoped access to the GraphQL client."""

from dataclasses import dataclass, field
from typing import Any, Protocol


class GraphQLExecutor(Protocol):
    """Anything that can run a GraphQL document against a shop."""

    async def execute(
        self,
        shop_domain: str,
        access_token: str,
        document: str,
        variables: dict[str, Any] | None = None,
    ) -> dict[str, Any]: ...


@dataclass(frozen=True)
class ShopConnection:
    """GraphQL client bound to one shop and its access token for one request."""

    client: GraphQLExecutor
    shop_domain: str
    access_token: str = field(repr=False)

    async def execute(
        self, document: str, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Run a document against the bound shop."""
        return await self.client.execute(
            self.shop_domain, self.access_token, document, variables
        )


def user_errors(payload: dict[str, Any] | None, key: str = "userErrors") -> list[dict[str, Any]]:
    """Extract operation-scoped field errors from a mutation payload."""
    if not payload:
        return []
    return list(payload.get(key) or [])
