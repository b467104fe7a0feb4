"""
Zip packaging for build units.

A ZipPackage is both the packaging step that writes the archive and the
Archive artifact that checks inspect afterwards.
"""

import zipfile
from pathlib import Path
from typing import Iterator, List, Optional, Union

from buildchecks.artifacts.archive import Archive
from buildchecks.cli.utils.logging import logger

PACKAGE_TYPES = ("zip", "jar")


class ZipPackage(Archive):
    def __init__(
        self,
        path: Union[str, Path],
        base_dir: Union[str, Path] = Path(),
        includes: Optional[List[str]] = None,
        compression=zipfile.ZIP_DEFLATED,
        compresslevel: Optional[int] = None,
    ):
        super().__init__(path)
        self.base_dir = Path(base_dir)
        self.includes: List[str] = list(includes or [])
        self.compression = compression
        self.compresslevel = compresslevel

    def include(self, *patterns: str) -> "ZipPackage":
        """Add paths (or globs) relative to the base directory to the package."""
        self.includes.extend(patterns)
        return self

    def _collect(self) -> Iterator[Path]:
        own_path = self.archive_path.resolve()
        seen = set()
        for pattern in self.includes:
            for match in sorted(self.base_dir.glob(pattern)):
                candidates = [match]
                if match.is_dir():
                    candidates += sorted(match.rglob("*"))
                for candidate in candidates:
                    resolved = candidate.resolve()
                    if resolved == own_path or own_path.is_relative_to(resolved):
                        # never package the archive (or a directory holding it)
                        continue
                    if resolved not in seen:
                        seen.add(resolved)
                        yield candidate

    def produce(self) -> Path:
        """Write the archive from the included paths and return its path."""
        self.archive_path.parent.mkdir(parents=True, exist_ok=True)
        count = 0
        with zipfile.ZipFile(
            self.archive_path,
            "w",
            compression=self.compression,
            compresslevel=self.compresslevel,
        ) as archive:
            for filename in self._collect():
                arcname = filename.relative_to(self.base_dir).as_posix()
                # directories are written as "name/" entries so empty ones survive
                archive.write(filename, arcname)
                count += 1
        self.invalidate()
        logger.info(f"Packaged {count} entries into {self.archive_path}")
        return self.archive_path
