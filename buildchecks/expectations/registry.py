from typing import Any, Iterator, List, Optional

from returns.result import Success

from buildchecks.cli.utils.logging import logger
from buildchecks.expectations.expectation import (
    Assertion,
    Expectation,
    ExpectationResult,
    create_expectation,
    describe_error,
)


class ExpectationRegistry:
    """Ordered, append-only expectations of a single build unit."""

    def __init__(self, owner: Any):
        self.owner = owner
        self._expectations: List[Expectation] = []

    def __iter__(self) -> Iterator[Expectation]:
        return iter(self._expectations)

    def __len__(self) -> int:
        return len(self._expectations)

    def __getitem__(self, index: int) -> Expectation:
        return self._expectations[index]

    def register(
        self,
        subject_or_description: Any = None,
        description: Optional[str] = None,
        assertion: Optional[Assertion] = None,
    ) -> Expectation:
        """Register an expectation without evaluating it."""
        expectation = create_expectation(
            self.owner, subject_or_description, description, assertion
        )
        self._expectations.append(expectation)
        return expectation

    def evaluate_all(self) -> List[ExpectationResult]:
        """Evaluate every expectation in registration order.

        A failing expectation never stops the ones registered after it.
        """
        results = []
        for expectation in self._expectations:
            logger.debug(f"Checking: {expectation.description}")
            outcome = expectation.evaluate()
            if isinstance(outcome, Success):
                results.append(
                    ExpectationResult(expectation, True, outcome.unwrap())
                )
            else:
                error = outcome.failure()
                results.append(
                    ExpectationResult(expectation, False, describe_error(error), error)
                )
        return results
