"""Artifacts backed by the local filesystem."""

from pathlib import Path
from typing import List, Union

from buildchecks.artifacts.base import ContainerArtifact, LeafArtifact
from buildchecks.errors import ArtifactAccessError


class _LocalPathMixin:
    path: Path

    def __str__(self) -> str:
        return str(self.path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.path)!r})"

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and self.path == other.path

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.path))


class PlainFile(_LocalPathMixin, LeafArtifact):
    """A regular file on disk."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def is_empty(self) -> bool:
        try:
            return self.exists() and self.path.stat().st_size == 0
        except OSError as e:
            raise ArtifactAccessError(f"Cannot stat {self.path}: {e}") from e

    def read_content(self) -> bytes:
        try:
            return self.path.read_bytes()
        except OSError as e:
            raise ArtifactAccessError(f"Cannot read {self.path}: {e}") from e


class Directory(_LocalPathMixin, ContainerArtifact):
    """A directory on disk, matched by the relative paths below it."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_dir()

    def is_empty(self) -> bool:
        if not self.exists():
            return False
        try:
            return not any(p.is_file() for p in self.path.rglob("*"))
        except OSError as e:
            raise ArtifactAccessError(f"Cannot list {self.path}: {e}") from e

    def descendant_paths(self) -> List[str]:
        if not self.exists():
            return []
        try:
            return sorted(p.relative_to(self.path).as_posix() for p in self.path.rglob("*"))
        except OSError as e:
            raise ArtifactAccessError(f"Cannot list {self.path}: {e}") from e


def create_local_artifact(path: Union[str, Path]) -> Union[PlainFile, Directory]:
    """Factory function picking the artifact kind from what is on disk now.

    Anything that is not a directory (including a missing path) is a PlainFile.
    """
    path = Path(path)
    if path.is_dir():
        return Directory(path)
    return PlainFile(path)
