from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from returns.result import Result, Success, Failure

from buildchecks.errors import BuildCheckError

Assertion = Callable[[Any], Any]


@dataclass(frozen=True, slots=True)
class Expectation:
    """A subject, a description and an optional deferred assertion.

    The assertion is called with the subject as its only argument. It passes
    by returning (any value) and fails by raising.
    """

    subject: Any
    description: str
    assertion: Optional[Assertion] = field(default=None, compare=False)

    def __str__(self) -> str:
        return self.description

    def evaluate(self) -> Result[str, Exception]:
        if self.assertion is None:
            return Success("No assertion.")
        try:
            self.assertion(self.subject)
        except Exception as e:
            return Failure(e)
        return Success("Passed.")

    def __call__(self) -> None:
        """Run the assertion directly, raising on failure (for nested checks)."""
        if self.assertion is not None:
            self.assertion(self.subject)


@dataclass(frozen=True, slots=True)
class ExpectationResult:
    """Represents the outcome of evaluating one expectation."""

    expectation: Expectation
    success: bool
    message: str = ""
    error: Optional[Exception] = field(default=None, compare=False)

    @property
    def description(self) -> str:
        return self.expectation.description


def describe_error(error: Exception) -> str:
    if isinstance(error, BuildCheckError):
        return str(error)
    if isinstance(error, AssertionError):
        return str(error) or "assertion failed"
    return f"{type(error).__name__}: {error}"


def create_expectation(
    owner: Any,
    subject_or_description: Any = None,
    description: Optional[str] = None,
    assertion: Optional[Assertion] = None,
) -> Expectation:
    """Resolve registration arguments into an Expectation.

    - a non-string first argument is the subject, otherwise the owner is
    - a string first argument without an explicit subject is the description
    - an explicit subject with a description yields "<subject> <description>"
    - without any description, the subject's text is the description
    """
    if isinstance(subject_or_description, str):
        if description is not None:
            raise TypeError("description given twice")
        return Expectation(owner, subject_or_description, assertion)

    if subject_or_description is None:
        subject = owner
        text = description if description is not None else str(owner)
    else:
        subject = subject_or_description
        text = (
            f"{subject} {description}" if description is not None else str(subject)
        )
    return Expectation(subject, text, assertion)
