"""Shopify product provisioner.

Modules:
    domain          - Submission value objects, remote records, errors, stage results
    catalog         - Provisioning stages (product, location, variants, media, inventory)
    application     - Provisioning service sequencing the stages
    infrastructure  - Configuration, persistence, logging, Shopify GraphQL client
    api             - FastAPI routers and schemas
"""
