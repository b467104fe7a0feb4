"""Expectations and the per-unit registry that holds them."""

from buildchecks.expectations.expectation import (
    Expectation,
    ExpectationResult,
    create_expectation,
    describe_error,
)
from buildchecks.expectations.registry import ExpectationRegistry

__all__ = [
    "Expectation",
    "ExpectationResult",
    "ExpectationRegistry",
    "create_expectation",
    "describe_error",
]
