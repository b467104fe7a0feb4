"""
Inspectable build outputs.

Five artifact kinds share one interface (``exists``, ``is_empty``,
``descendant_paths`` for containers, ``read_content`` for leaves):

    - PlainFile: a regular file on disk
    - Directory: a directory on disk
    - Archive: a ZIP archive on disk
    - ArchivePath: a directory prefix inside an archive
    - ArchiveEntry: a single entry inside an archive
"""

from buildchecks.artifacts.base import Artifact, ContainerArtifact, LeafArtifact
from buildchecks.artifacts.local import PlainFile, Directory, create_local_artifact
from buildchecks.artifacts.archive import (
    Archive,
    ArchivePath,
    ArchiveEntry,
    join_entry_path,
)
from buildchecks.artifacts.glob import compile_glob, glob_matches, any_glob_match

__all__ = [
    "Artifact",
    "ContainerArtifact",
    "LeafArtifact",
    "PlainFile",
    "Directory",
    "create_local_artifact",
    "Archive",
    "ArchivePath",
    "ArchiveEntry",
    "join_entry_path",
    "compile_glob",
    "glob_matches",
    "any_glob_match",
]
