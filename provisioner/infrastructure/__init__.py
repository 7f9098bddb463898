"""Infrastructure layer module.

Contains configuration, persistence, and the Shopify GraphQL client.
"""
