"""
Artifacts backed by a packaged ZIP archive.

An Archive reads the central directory of its file once, on first query, and
keeps it for its lifetime. ArchivePath and ArchiveEntry objects derived from
an Archive share that listing; entry content is only decompressed when a
content matcher asks for it.
"""

import zipfile
from pathlib import Path
from typing import Dict, List, Optional, Union

from buildchecks.artifacts.base import ContainerArtifact, LeafArtifact
from buildchecks.cli.utils.logging import logger
from buildchecks.errors import ArtifactAccessError


def join_entry_path(*parts: str) -> str:
    """Join archive path fragments into one canonical '/'-separated entry path.

    Empty and '.' segments are dropped, so "./a//b/" and ("a", "b") agree.
    """
    segments = []
    for part in parts:
        segments.extend(
            s for s in str(part).replace("\\", "/").split("/") if s and s != "."
        )
    return "/".join(segments)


def _listing_key(info: zipfile.ZipInfo) -> str:
    name = join_entry_path(info.filename)
    # directory entries keep a trailing '/' so they never match an ArchiveEntry
    return name + "/" if name and info.is_dir() else name


class Archive(ContainerArtifact):
    """A ZIP archive on disk, matched by the relative paths of its entries."""

    def __init__(self, path: Union[str, Path]):
        self.archive_path = Path(path)
        self._listing: Optional[Dict[str, zipfile.ZipInfo]] = None

    def __str__(self) -> str:
        return str(self.archive_path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.archive_path)!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Archive) and self.archive_path == other.archive_path

    def __hash__(self) -> int:
        return hash(("Archive", self.archive_path))

    def listing(self) -> Optional[Dict[str, zipfile.ZipInfo]]:
        """Return the archive's entries keyed by canonical entry name.

        Directory entries end in '/'. Returns None if the archive file does
        not exist. A missing archive is not cached, so a listing can still be
        loaded once the file appears.
        """
        if self._listing is not None:
            return self._listing
        if not self.archive_path.is_file():
            return None
        try:
            with zipfile.ZipFile(self.archive_path) as zf:
                infos = zf.infolist()
        except (zipfile.BadZipFile, OSError) as e:
            raise ArtifactAccessError(
                f"Cannot read archive {self.archive_path}: {e}"
            ) from e
        self._listing = {}
        for info in infos:
            key = _listing_key(info)
            if key:
                self._listing[key] = info
        logger.debug(f"Loaded {len(self._listing)} entries from {self.archive_path}")
        return self._listing

    def invalidate(self) -> None:
        """Drop the cached listing, e.g. after the archive was rewritten."""
        self._listing = None

    def read_entry(self, name: str) -> bytes:
        listing = self.listing() or {}
        info = listing.get(join_entry_path(name))
        if info is None:
            raise ArtifactAccessError(f"No entry {name} in {self.archive_path}")
        try:
            with zipfile.ZipFile(self.archive_path) as zf:
                return zf.read(info)
        except (zipfile.BadZipFile, OSError) as e:
            raise ArtifactAccessError(
                f"Cannot read entry {name} from {self.archive_path}: {e}"
            ) from e

    def _names_below(self, prefix: str) -> List[str]:
        listing = self.listing()
        if listing is None:
            return []
        if not prefix:
            return list(listing)
        return [name for name in listing if name.startswith(prefix + "/")]

    def _relative_paths(self, prefix: str) -> List[str]:
        offset = len(prefix) + 1 if prefix else 0
        paths = set()
        for name in self._names_below(prefix):
            segments = [s for s in name[offset:].split("/") if s]
            # parent directories count even without their own entry
            for i in range(1, len(segments) + 1):
                paths.add("/".join(segments[:i]))
        return sorted(paths)

    def _has_files_below(self, prefix: str) -> bool:
        return any(not name.endswith("/") for name in self._names_below(prefix))

    def exists(self) -> bool:
        return self.listing() is not None

    def is_empty(self) -> bool:
        return self.exists() and not self._has_files_below("")

    def descendant_paths(self) -> List[str]:
        return self._relative_paths("")

    def path(self, *parts: str) -> Union["Archive", "ArchivePath"]:
        """Address a directory inside the archive."""
        prefix = join_entry_path(*parts)
        if not prefix:
            return self
        return ArchivePath(self, prefix)

    def entry(self, *parts: str) -> "ArchiveEntry":
        """Address a single entry inside the archive."""
        return ArchiveEntry(self, join_entry_path(*parts))


class ArchivePath(ContainerArtifact):
    """A directory prefix inside an archive."""

    def __init__(self, archive: Archive, prefix: str):
        self.archive = archive
        self.prefix = join_entry_path(prefix)

    def __str__(self) -> str:
        return f"{self.archive}:{self.prefix}"

    def __repr__(self) -> str:
        return f"ArchivePath({self.archive!r}, {self.prefix!r})"

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, ArchivePath)
            and self.archive == other.archive
            and self.prefix == other.prefix
        )

    def __hash__(self) -> int:
        return hash(("ArchivePath", self.archive.archive_path, self.prefix))

    def exists(self) -> bool:
        return bool(self.archive._names_below(self.prefix))

    def is_empty(self) -> bool:
        return self.exists() and not self.archive._has_files_below(self.prefix)

    def descendant_paths(self) -> List[str]:
        return self.archive._relative_paths(self.prefix)

    def path(self, *parts: str) -> "ArchivePath":
        return ArchivePath(self.archive, join_entry_path(self.prefix, *parts))

    def entry(self, *parts: str) -> "ArchiveEntry":
        return ArchiveEntry(self.archive, join_entry_path(self.prefix, *parts))


class ArchiveEntry(LeafArtifact):
    """A single file entry inside an archive."""

    def __init__(self, archive: Archive, name: str):
        self.archive = archive
        self.name = join_entry_path(name)

    def __str__(self) -> str:
        return f"{self.archive}:{self.name}"

    def __repr__(self) -> str:
        return f"ArchiveEntry({self.archive!r}, {self.name!r})"

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, ArchiveEntry)
            and self.archive == other.archive
            and self.name == other.name
        )

    def __hash__(self) -> int:
        return hash(("ArchiveEntry", self.archive.archive_path, self.name))

    def _info(self) -> Optional[zipfile.ZipInfo]:
        listing = self.archive.listing()
        if listing is None:
            return None
        return listing.get(self.name)

    def exists(self) -> bool:
        return self._info() is not None

    def is_empty(self) -> bool:
        info = self._info()
        return info is not None and info.file_size == 0

    def read_content(self) -> bytes:
        return self.archive.read_entry(self.name)
