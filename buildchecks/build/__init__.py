"""
Minimal build model: declared file targets, zip packages and a check phase.
"""

from buildchecks.build.targets import FileTarget
from buildchecks.build.package import ZipPackage, PACKAGE_TYPES
from buildchecks.build.unit import BuildUnit

__all__ = ["BuildUnit", "FileTarget", "ZipPackage", "PACKAGE_TYPES"]
