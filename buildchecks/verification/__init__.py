"""Check phase: evaluate every expectation of a build unit and aggregate failures."""

from buildchecks.verification.runner import (
    RunnerState,
    VerificationReport,
    VerificationRunner,
)

__all__ = ["RunnerState", "VerificationReport", "VerificationRunner"]
