# matchers/engine.py
#
# Artifact-aware matchers used inside expectation assertions.
# Handlers return `returns` Results; the public matcher functions raise
# MatcherFailure so they compose with plain `assert` statements.

import os
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence, TypeAlias

from returns.result import Result, Success, Failure

from buildchecks.artifacts.base import Artifact
from buildchecks.artifacts.glob import any_glob_match
from buildchecks.artifacts.local import create_local_artifact
from buildchecks.config import get_content_encoding
from buildchecks.errors import ArtifactAccessError, BuildCheckError, MatcherFailure


@dataclass(frozen=True, slots=True)
class MatcherResult:
    """Represents the outcome of applying one matcher to one subject."""

    subject: str
    matcher: str
    success: bool
    message: str = ""
    patterns: tuple = ()
    error: BuildCheckError | None = field(default=None, compare=False)


HandlerResult: TypeAlias = Result[str, BuildCheckError]


def describe_pattern(pattern: Any) -> str:
    if isinstance(pattern, re.Pattern):
        return f"/{pattern.pattern}/"
    return repr(pattern)


def _as_artifact(subject: Any) -> Artifact | None:
    if isinstance(subject, Artifact):
        return subject
    if isinstance(subject, os.PathLike):
        return create_local_artifact(subject)
    return None


def _not_an_artifact(subject: Any, matcher: str) -> HandlerResult:
    return Failure(
        MatcherFailure(
            subject, matcher, message=f"{subject} is not an artifact, cannot {matcher}"
        )
    )


def _handle_exist(subject: Any, **_: Any) -> HandlerResult:
    artifact = _as_artifact(subject)
    if artifact is None:
        return _not_an_artifact(subject, "exist")
    if artifact.exists():
        return Success(f"{subject} exists.")
    return Failure(MatcherFailure(subject, "exist", message=f"{subject} does not exist"))


def _handle_be_empty(subject: Any, **_: Any) -> HandlerResult:
    artifact = _as_artifact(subject)
    if artifact is None:
        return _not_an_artifact(subject, "be_empty")
    if not artifact.exists():
        return Failure(
            MatcherFailure(subject, "be_empty", message=f"{subject} does not exist")
        )
    if artifact.is_empty():
        return Success(f"{subject} is empty.")
    return Failure(MatcherFailure(subject, "be_empty", message=f"{subject} is not empty"))


def _content_matches(content: bytes, text: str, pattern: Any) -> bool:
    if isinstance(pattern, re.Pattern):
        target = content if isinstance(pattern.pattern, bytes) else text
        return pattern.search(target) is not None
    if isinstance(pattern, bytes):
        return pattern in content
    return str(pattern) in text


def _path_matches(paths: list[str], pattern: Any) -> bool:
    if isinstance(pattern, re.Pattern):
        return any(pattern.search(path) for path in paths)
    return any_glob_match(str(pattern), paths)


def _handle_contain(
    subject: Any, patterns: Sequence[Any] = (), **_: Any
) -> HandlerResult:
    artifact = _as_artifact(subject)
    if artifact is None:
        return _not_an_artifact(subject, "contain")
    patterns = tuple(patterns)
    if not artifact.exists():
        return Failure(
            MatcherFailure(
                subject, "contain", patterns, message=f"{subject} does not exist"
            )
        )
    if not patterns:
        return Failure(
            MatcherFailure(
                subject,
                "contain",
                patterns,
                message=f"Nothing to match: contain needs at least one pattern for {subject}",
            )
        )

    # Every pattern is checked so the failure names all of the missing ones
    if artifact.is_container:
        paths = artifact.descendant_paths()
        missing = [p for p in patterns if not _path_matches(paths, p)]
    else:
        content = artifact.read_content()
        text = content.decode(get_content_encoding(), errors="replace")
        missing = [p for p in patterns if not _content_matches(content, text, p)]

    if missing:
        listed = ", ".join(describe_pattern(p) for p in missing)
        return Failure(
            MatcherFailure(
                subject,
                "contain",
                patterns,
                message=f"{subject} does not contain {listed}",
            )
        )
    return Success(f"{subject} contains all {len(patterns)} pattern(s).")


MATCHER_REGISTRY: dict[str, Callable[..., HandlerResult]] = {
    "exist": _handle_exist,
    "be_empty": _handle_be_empty,
    "contain": _handle_contain,
}


def apply_matcher(matcher: str, subject: Any, *patterns: Any) -> MatcherResult:
    """Applies a single matcher and unwraps the Result into a MatcherResult."""
    handler = MATCHER_REGISTRY.get(matcher)
    if not handler:
        result: HandlerResult = Failure(
            MatcherFailure(subject, matcher, patterns, f"Unknown matcher: '{matcher}'")
        )
    else:
        try:
            result = handler(subject, patterns=patterns)
        except ArtifactAccessError as e:
            result = Failure(e)

    if isinstance(result, Success):
        return MatcherResult(str(subject), matcher, True, result.unwrap(), patterns)
    error = result.failure()
    return MatcherResult(str(subject), matcher, False, str(error), patterns, error)


def _assert_matcher(matcher: str, subject: Any, *patterns: Any) -> None:
    result = apply_matcher(matcher, subject, *patterns)
    if not result.success:
        raise result.error


def exist(subject: Any) -> None:
    """Assert that the subject artifact exists."""
    _assert_matcher("exist", subject)


def be_empty(subject: Any) -> None:
    """Assert that the subject artifact exists and is empty."""
    _assert_matcher("be_empty", subject)


def contain(subject: Any, *patterns: Any) -> None:
    """Assert that the subject artifact contains every one of the patterns.

    Files and archive entries are searched for each pattern in their content
    (str or bytes literals, or compiled regular expressions). Directories,
    archives and archive paths match each pattern as a path glob against the
    paths below them.
    """
    _assert_matcher("contain", subject, *patterns)
