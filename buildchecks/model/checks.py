"""Pydantic models for declarative checks files.

Example checks.yaml:
--------------------
    name: foo
    checks:
      - file: out/report.txt
        description: should mention totals
        expect:
          - exist
          - contain: ["Total", {regex: "\\d+ items"}]

      - archive: target/foo-1.0.zip
        path: resources
        expect:
          - contain: ["**/t*st"]

      - archive: target/foo-1.0.zip
        entry: resources/test
        expect: [be_empty]
"""

import re
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from buildchecks.artifacts.archive import Archive
from buildchecks.artifacts.base import Artifact
from buildchecks.build.unit import BuildUnit
from buildchecks.errors import ChecksFileError
from buildchecks.expectations.expectation import Expectation
from buildchecks.matchers.engine import MATCHER_REGISTRY, be_empty, contain, exist

PATTERNLESS_MATCHERS = ("exist", "be_empty")

MATCHER_FUNCTIONS: Dict[str, Callable[..., None]] = {
    "exist": exist,
    "be_empty": be_empty,
    "contain": contain,
}


class RegexPattern(BaseModel):
    """A content or path pattern given as a regular expression."""

    regex: str = Field(..., description="Regular expression, searched anywhere")

    @field_validator("regex")
    @classmethod
    def validate_regex(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"invalid regular expression '{v}': {e}")
        return v

    def compile(self) -> re.Pattern:
        return re.compile(self.regex)


class MatcherSpec(BaseModel):
    """One matcher applied to a check's subject."""

    matcher: str = Field(..., description="Matcher name")
    patterns: List[Union[str, RegexPattern]] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def from_shorthand(cls, data: Any) -> Any:
        # "exist" or {"contain": [...]} or {"contain": "single"}
        if isinstance(data, str):
            return {"matcher": data}
        if isinstance(data, dict) and "matcher" not in data:
            if len(data) != 1:
                raise ValueError("each expect item must name exactly one matcher")
            ((name, value),) = data.items()
            if value is None:
                value = []
            elif not isinstance(value, list):
                value = [value]
            return {"matcher": name, "patterns": value}
        return data

    @field_validator("matcher")
    @classmethod
    def validate_matcher(cls, v: str) -> str:
        if v not in MATCHER_REGISTRY:
            raise ValueError(
                f"unknown matcher '{v}', expected one of {sorted(MATCHER_REGISTRY)}"
            )
        return v

    @model_validator(mode="after")
    def validate_patterns(self) -> "MatcherSpec":
        if self.patterns and self.matcher in PATTERNLESS_MATCHERS:
            raise ValueError(f"matcher '{self.matcher}' takes no patterns")
        return self

    def resolved_patterns(self) -> List[Union[str, re.Pattern]]:
        return [p.compile() if isinstance(p, RegexPattern) else p for p in self.patterns]


class CheckSpec(BaseModel):
    """A single expectation: one subject and the matchers it must satisfy."""

    file: Optional[str] = Field(None, description="File or directory path")
    archive: Optional[str] = Field(None, description="Archive path")
    path: Optional[str] = Field(None, description="Directory inside the archive")
    entry: Optional[str] = Field(None, description="Entry inside the archive")
    description: Optional[str] = None
    expect: List[MatcherSpec] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_subject(self) -> "CheckSpec":
        if (self.file is None) == (self.archive is None):
            raise ValueError("exactly one of 'file' or 'archive' is required")
        if self.archive is None and (self.path is not None or self.entry is not None):
            raise ValueError("'path' and 'entry' are only valid with 'archive'")
        if self.path is not None and self.entry is not None:
            raise ValueError("'path' and 'entry' are mutually exclusive")
        return self


class ChecksFile(BaseModel):
    """Top-level checks file."""

    name: str = Field("checks", description="Name of the checked build unit")
    version: Optional[str] = None
    checks: List[CheckSpec] = Field(default_factory=list)


def load_checks(checks_path: Union[str, Path]) -> ChecksFile:
    """Load and validate a YAML checks file."""
    checks_path = Path(checks_path)
    try:
        with checks_path.open("r") as f:
            content = yaml.safe_load(f)
    except FileNotFoundError:
        raise ChecksFileError(f"Checks file not found: {checks_path}")
    except yaml.YAMLError as e:
        raise ChecksFileError(f"Failed to parse {checks_path}: {e}")

    if content is None:
        content = {}
    if not isinstance(content, dict):
        raise ChecksFileError(f"{checks_path} must contain a mapping at top level")

    try:
        return ChecksFile.model_validate(content)
    except ValidationError as e:
        raise ChecksFileError(f"Invalid checks file {checks_path}:\n{e}")


def _make_assertion(matchers: List[MatcherSpec]) -> Callable[[Any], None]:
    def assertion(subject: Any) -> None:
        for spec in matchers:
            MATCHER_FUNCTIONS[spec.matcher](subject, *spec.resolved_patterns())

    return assertion


def register_checks(unit: BuildUnit, checks_file: ChecksFile) -> List[Expectation]:
    """Register one expectation per check on the unit, in file order."""
    archives: Dict[Path, Archive] = {}
    registered = []
    for check in checks_file.checks:
        subject: Artifact
        if check.file is not None:
            subject = unit.file(check.file)
        else:
            archive_path = unit.path_to(check.archive)
            # one Archive per file, so its listing is read only once
            archive = archives.setdefault(archive_path, Archive(archive_path))
            if check.entry is not None:
                subject = archive.entry(check.entry)
            elif check.path is not None:
                subject = archive.path(check.path)
            else:
                subject = archive
        assertion = _make_assertion(check.expect) if check.expect else None
        registered.append(unit.check(subject, check.description, assertion))
    return registered
