"""Stage result type.

Every pipeline stage reports its outcome as a ``StageResult``: either a
value, or the ``ProvisioningError`` describing why the stage failed.
Remote field errors therefore never come back as ordinary data.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from provisioner.domain.exceptions import ProvisioningError

T = TypeVar("T")


@dataclass(frozen=True)
class StageResult(Generic[T]):
    """Outcome of one pipeline stage."""

    value: T | None = None
    error: ProvisioningError | None = None

    @property
    def success(self) -> bool:
        """True when the stage produced a value."""
        return self.error is None

    @classmethod
    def ok(cls, value: T) -> "StageResult[T]":
        """Wrap a successful value."""
        return cls(value=value)

    @classmethod
    def failed(cls, error: ProvisioningError) -> "StageResult[T]":
        """Wrap a stage failure."""
        return cls(error=error)

    def unwrap(self) -> T:
        """Return the value or raise the stage's error.

        Raises:
            ProvisioningError: The error the stage failed with.
        """
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
