"""Exception hierarchy for build checks."""

from typing import Any, Sequence


class BuildCheckError(Exception):
    """Base exception for all build check errors."""

    pass


class MatcherFailure(BuildCheckError):
    """Raised when a matcher does not hold for its subject."""

    def __init__(
        self,
        subject: Any,
        matcher: str,
        patterns: Sequence[Any] = (),
        message: str = "",
    ):
        self.subject = subject
        self.matcher = matcher
        self.patterns = tuple(patterns)
        self.message = message or f"Expected {subject} to {matcher.replace('_', ' ')}"
        super().__init__(self.message)


class ArtifactAccessError(BuildCheckError):
    """Raised when an artifact exists but cannot be read (e.g. a corrupt archive)."""

    pass


class ChecksFileError(BuildCheckError):
    """Raised when a checks file cannot be loaded or parsed."""

    pass


class VerificationFailure(BuildCheckError):
    """Raised once by the check phase when one or more expectations failed."""

    def __init__(self, *failures: Any, report: Any = None) -> None:
        self.failures = failures[0] if len(failures) == 1 else failures
        self.report = report
        super().__init__(*failures)

    def __str__(self) -> str:
        if isinstance(self.failures, str):
            return self.failures
        else:
            return "\n".join(map(str, self.failures))
