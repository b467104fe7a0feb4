"""Post-build verification of files, directories and packaged archives."""

__version__ = "0.1.0"

from buildchecks.errors import (
    BuildCheckError,
    MatcherFailure,
    ArtifactAccessError,
    ChecksFileError,
    VerificationFailure,
)
from buildchecks.artifacts import (
    Artifact,
    PlainFile,
    Directory,
    Archive,
    ArchivePath,
    ArchiveEntry,
)
from buildchecks.matchers import exist, be_empty, contain
from buildchecks.expectations import Expectation, ExpectationRegistry
from buildchecks.verification import VerificationRunner, VerificationReport
from buildchecks.build import BuildUnit

__all__ = [
    "__version__",
    "BuildCheckError",
    "MatcherFailure",
    "ArtifactAccessError",
    "ChecksFileError",
    "VerificationFailure",
    "Artifact",
    "PlainFile",
    "Directory",
    "Archive",
    "ArchivePath",
    "ArchiveEntry",
    "exist",
    "be_empty",
    "contain",
    "Expectation",
    "ExpectationRegistry",
    "VerificationRunner",
    "VerificationReport",
    "BuildUnit",
]
