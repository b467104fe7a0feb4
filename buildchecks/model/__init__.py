"""Declarative checks files."""

from buildchecks.model.checks import (
    ChecksFile,
    CheckSpec,
    MatcherSpec,
    RegexPattern,
    load_checks,
    register_checks,
)

__all__ = [
    "ChecksFile",
    "CheckSpec",
    "MatcherSpec",
    "RegexPattern",
    "load_checks",
    "register_checks",
]
