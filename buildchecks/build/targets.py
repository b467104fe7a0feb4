from pathlib import Path
from typing import Any, Callable, List, Optional, Union

from buildchecks.artifacts.base import Artifact
from buildchecks.artifacts.local import create_local_artifact


class FileTarget(Artifact):
    """
    A declared file or directory output of a build unit.

    Queries resolve to a PlainFile or Directory for whatever is on disk at
    that moment. Querying never runs the action; only invoke() does.
    """

    def __init__(
        self,
        path: Union[str, Path],
        action: Optional[Callable[["FileTarget"], Any]] = None,
    ):
        self.path = Path(path)
        self.action = action

    def __str__(self) -> str:
        return str(self.path)

    def __repr__(self) -> str:
        return f"FileTarget({str(self.path)!r})"

    def _resolve(self) -> Artifact:
        return create_local_artifact(self.path)

    @property
    def is_container(self) -> bool:  # type: ignore[override]
        return self._resolve().is_container

    def exists(self) -> bool:
        return self._resolve().exists()

    def is_empty(self) -> bool:
        return self._resolve().is_empty()

    def descendant_paths(self) -> List[str]:
        return self._resolve().descendant_paths()

    def read_content(self) -> bytes:
        return self._resolve().read_content()

    def invoke(self) -> None:
        """Run the action that produces this target."""
        if self.action is not None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.action(self)
