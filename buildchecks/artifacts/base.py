from abc import ABCMeta, abstractmethod
from typing import List


class Artifact(metaclass=ABCMeta):
    """
    Class to represent an inspectable build output.

    Queries on an artifact only look at what is already on disk; they never
    produce the artifact.
    """

    #: Containers are matched by path globs, leaves by content patterns.
    is_container: bool = False

    @abstractmethod
    def exists(self) -> bool:
        """Check if the artifact exists."""
        pass

    @abstractmethod
    def is_empty(self) -> bool:
        """Check if the artifact is empty."""
        pass

    def descendant_paths(self) -> List[str]:
        """List paths below the artifact root, relative and '/'-separated."""
        raise NotImplementedError(f"{self} is not a container artifact")

    def read_content(self) -> bytes:
        """Read the full content of the artifact."""
        raise NotImplementedError(f"{self} has no readable content")


class ContainerArtifact(Artifact):
    is_container = True

    @abstractmethod
    def descendant_paths(self) -> List[str]:
        pass


class LeafArtifact(Artifact):
    is_container = False

    @abstractmethod
    def read_content(self) -> bytes:
        pass
