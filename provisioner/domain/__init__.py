"""Domain layer module.

Contains the submission value objects, remote records, the stage result
type, and the provisioning error hierarchy.
"""

from provisioner.domain.exceptions import (
    IntegrityError,
    ProvisioningError,
    RemoteOperationError,
    TransportError,
    ValidationError,
)
from provisioner.domain.remote import (
    MediaLink,
    ProvisioningResult,
    RemoteMedia,
    RemoteOption,
    RemoteProduct,
    RemoteVariant,
)
from provisioner.domain.results import StageResult
from provisioner.domain.submission import Image, Option, ProductSubmission, Variant

__all__ = [
    # Exceptions
    "IntegrityError",
    "ProvisioningError",
    "RemoteOperationError",
    "TransportError",
    "ValidationError",
    # Submission
    "Image",
    "Option",
    "ProductSubmission",
    "Variant",
    # Remote records
    "MediaLink",
    "ProvisioningResult",
    "RemoteMedia",
    "RemoteOption",
    "RemoteProduct",
    "RemoteVariant",
    # Results
    "StageResult",
]
