"""Application layer module.

Contains application services (use cases) that orchestrate
catalog stages and infrastructure.
"""

from provisioner.application.provisioning_service import (
    ProvisioningService,
    get_provisioning_service,
)

__all__ = [
    "ProvisioningService",
    "get_provisioning_service",
]
