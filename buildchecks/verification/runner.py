"""
Check phase of a build unit.

The runner evaluates every registered expectation once, collects the failures
in a report and turns them into a single VerificationFailure.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from buildchecks.cli.utils.logging import logger
from buildchecks.core.interfaces import CheckableUnit
from buildchecks.errors import VerificationFailure
from buildchecks.expectations.expectation import ExpectationResult


class RunnerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class VerificationReport:
    """Aggregates all expectation results for a single build unit."""

    unit_name: str
    results: List[ExpectationResult] = field(default_factory=list)

    @property
    def failures(self) -> List[ExpectationResult]:
        return [r for r in self.results if not r.success]

    @property
    def passed(self) -> bool:
        return not self.failures

    def summary(self) -> str:
        failures = self.failures
        if not failures:
            return f"All {len(self.results)} checks passed for {self.unit_name}."
        lines = [
            f"Checks failed for {self.unit_name}: "
            f"{len(failures)} of {len(self.results)} expectations failed"
        ]
        for result in failures:
            lines.append(f"  - {result.description}: {result.message}")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unit": self.unit_name,
            "passed": self.passed,
            "total": len(self.results),
            "failed": len(self.failures),
            "results": [
                {
                    "description": r.description,
                    "success": r.success,
                    "message": r.message,
                }
                for r in self.results
            ],
        }


class VerificationRunner:
    """Runs the check phase of one build unit, once."""

    def __init__(self, unit: CheckableUnit):
        self.unit = unit
        self.state = RunnerState.IDLE
        self.report: VerificationReport | None = None

    def run(self) -> VerificationReport:
        """Evaluate all expectations of the unit.

        Returns the report if every expectation passed, and raises
        VerificationFailure listing every failed one otherwise.
        """
        if self.state is not RunnerState.IDLE:
            raise RuntimeError(
                f"Checks for {self.unit.name} already ran ({self.state.value})"
            )
        self.state = RunnerState.RUNNING

        results = self.unit.expectations.evaluate_all()
        self.report = VerificationReport(self.unit.name, results)

        if self.report.passed:
            self.state = RunnerState.PASSED
            logger.info(self.report.summary())
            return self.report

        self.state = RunnerState.FAILED
        failures = self.report.failures
        for result in failures:
            logger.error(f"{result.description}: {result.message}")
        raise VerificationFailure(
            f"Checks failed for {self.unit.name}: "
            f"{len(failures)} of {len(results)} expectations failed",
            *[f"  - {r.description}: {r.message}" for r in failures],
            report=self.report,
        )
