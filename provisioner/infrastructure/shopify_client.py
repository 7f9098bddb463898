"""Shopify Admin GraphQL client.

Executes one query or mutation against a shop and classifies the outcome.
The access token is supplied on every call and never stored, so a single
client instance can safely serve every shop.
"""

from typing import Any

import httpx
import structlog

from provisioner.domain.exceptions import RemoteOperationError, TransportError
from provisioner.infrastructure.config import settings

logger = structlog.get_logger()


def normalize_shop_domain(shop: str) -> str:
    """Normalize a shop reference to its bare domain.

    Args:
        shop: Shop name ("my-store"), domain, or URL.

    Returns:
        Domain such as "my-store.myshopify.com".
    """
    domain = shop.strip().replace("https://", "").replace("http://", "").rstrip("/")
    if "." not in domain:
        domain = f"{domain}.myshopify.com"
    return domain.lower()


class ShopifyGraphQLClient:
    """HTTP client for the Shopify Admin GraphQL API.

    No retries are attempted; every failure is raised to the caller.

    Usage:
        client = ShopifyGraphQLClient()
        data = await client.execute(shop, token, PRODUCT_CREATE, {"product": ...})
    """

    def __init__(
        self,
        api_version: str | None = None,
        timeout: float | None = None,
        connect_timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_version: Admin API version path segment.
            timeout: Request timeout in seconds.
            connect_timeout: Connect timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.api_version = api_version or settings.shopify_api_version
        self.timeout = timeout if timeout is not None else settings.shopify_timeout
        self.connect_timeout = (
            connect_timeout
            if connect_timeout is not None
            else settings.shopify_connect_timeout
        )
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def endpoint(self, shop_domain: str) -> str:
        """GraphQL endpoint URL for a shop."""
        domain = normalize_shop_domain(shop_domain)
        return f"https://{domain}/admin/api/{self.api_version}/graphql.json"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the pooled HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout, connect=self.connect_timeout),
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def execute(
        self,
        shop_domain: str,
        access_token: str,
        document: str,
        variables: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Execute one GraphQL document.

        Args:
            shop_domain: Shop domain the call is scoped to.
            access_token: Admin API access token for this shop.
            document: GraphQL query or mutation.
            variables: Operation variables.

        Returns:
            The response ``data`` object.

        Raises:
            TransportError: On network failure, timeout, or an unusable response.
            RemoteOperationError: When the response has a top-level ``errors`` list.
        """
        client = await self._get_client()
        url = self.endpoint(shop_domain)

        try:
            response = await client.post(
                url,
                json={"query": document, "variables": variables or {}},
                headers={"X-Shopify-Access-Token": access_token},
            )
        except httpx.TimeoutException as e:
            logger.error("Shopify request timed out", shop=shop_domain, error=str(e))
            raise TransportError(
                f"Shopify request timed out: {e}",
                details={"shop": shop_domain},
            ) from e
        except httpx.RequestError as e:
            logger.error("Shopify request failed", shop=shop_domain, error=str(e))
            raise TransportError(
                f"Shopify request failed: {e}",
                details={"shop": shop_domain},
            ) from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict) and body.get("errors"):
            logger.warning(
                "Shopify GraphQL errors",
                shop=shop_domain,
                status_code=response.status_code,
                errors=body["errors"],
            )
            raise RemoteOperationError("GraphQL errors from Shopify", body["errors"])

        if response.status_code >= 400 or not isinstance(body, dict):
            logger.error(
                "Unusable Shopify response",
                shop=shop_domain,
                status_code=response.status_code,
                body=response.text[:200],
            )
            raise TransportError(
                f"Shopify request failed with HTTP {response.status_code}",
                details={"shop": shop_domain, "status_code": response.status_code},
            )

        return body.get("data") or {}


# Process-wide client
_shopify_client: ShopifyGraphQLClient | None = None


def get_shopify_client() -> ShopifyGraphQLClient:
    """Get the shared Shopify client.

    Returns:
        ShopifyGraphQLClient instance.
    """
    global _shopify_client
    if _shopify_client is None:
        _shopify_client = ShopifyGraphQLClient()
    return _shopify_client


async def close_shopify_client() -> None:
    """Close the shared Shopify client, if one was created."""
    global _shopify_client
    if _shopify_client is not None:
        await _shopify_client.close()
        _shopify_client = None
