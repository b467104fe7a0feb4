"""Core interfaces and abstractions for buildchecks."""

from buildchecks.core.interfaces import CheckableUnit

__all__ = ["CheckableUnit"]
