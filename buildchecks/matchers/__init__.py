"""Artifact matchers for expectation assertions.

Supported Matchers:
-------------------
    - exist: the artifact exists
    - be_empty: the artifact exists and is empty
    - contain: the artifact contains every given pattern (content patterns for
      files and archive entries, path globs for directories, archives and
      archive paths)

Example:
--------
    unit.check(unit.package("zip").path("resources"), "ships resources",
               lambda it: contain(it, "**/*.properties"))
"""

from buildchecks.matchers.engine import (
    exist,
    be_empty,
    contain,
    apply_matcher,
    describe_pattern,
    MatcherResult,
    MATCHER_REGISTRY,
)

__all__ = [
    "exist",
    "be_empty",
    "contain",
    "apply_matcher",
    "describe_pattern",
    "MatcherResult",
    "MATCHER_REGISTRY",
]
