"""Protocol interfaces for verification.

Protocols that decouple the check phase from the build model.
"""

from typing import Protocol

from buildchecks.expectations.registry import ExpectationRegistry


class CheckableUnit(Protocol):
    """Minimal interface for a build unit whose expectations can be verified."""

    @property
    def name(self) -> str:
        """Build unit identifier."""
        ...

    @property
    def expectations(self) -> ExpectationRegistry:
        """Expectations registered for this unit, in registration order."""
        ...
