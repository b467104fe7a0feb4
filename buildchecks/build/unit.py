import zipfile
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from buildchecks.build.package import PACKAGE_TYPES, ZipPackage
from buildchecks.build.targets import FileTarget
from buildchecks.cli.utils.logging import logger
from buildchecks.expectations.expectation import Assertion, Expectation
from buildchecks.expectations.registry import ExpectationRegistry
from buildchecks.verification.runner import VerificationReport, VerificationRunner


class BuildUnit:
    """
    A project whose outputs are built, packaged and then checked.

    invoke() always runs the phases in the same order: build targets, produce
    packages, run package callbacks, and finally the check phase.
    """

    def __init__(
        self,
        name: str,
        base_dir: Union[str, Path] = Path(),
        version: Optional[str] = None,
        target_dir: str = "target",
    ):
        self._name = name
        self.base_dir = Path(base_dir)
        self.version = version
        self.target_dir = self.base_dir / target_dir
        self._expectations = ExpectationRegistry(self)
        self._targets: Dict[Path, FileTarget] = {}
        self._build_steps: List[FileTarget] = []
        self._packages: Dict[str, ZipPackage] = {}
        self._package_callbacks: List[Callable[["BuildUnit"], Any]] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def expectations(self) -> ExpectationRegistry:
        return self._expectations

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"BuildUnit({self._name!r})"

    def path_to(self, *parts: Union[str, Path]) -> Path:
        return self.base_dir.joinpath(*parts)

    def file(
        self,
        path: Union[str, Path],
        action: Optional[Callable[[FileTarget], Any]] = None,
    ) -> FileTarget:
        """Declare (or look up) a file target relative to the base directory."""
        full_path = self.path_to(path)
        target = self._targets.get(full_path)
        if target is None:
            target = FileTarget(full_path, action)
            self._targets[full_path] = target
        elif action is not None:
            target.action = action
        return target

    def build(self, *targets: FileTarget) -> None:
        """Add targets to the build phase."""
        self._build_steps.extend(targets)

    def package(
        self,
        package_type: str = "zip",
        include: tuple = (),
        file_name: Optional[str] = None,
        compression=zipfile.ZIP_DEFLATED,
    ) -> ZipPackage:
        """Declare (or look up) the package of the given type."""
        if package_type not in PACKAGE_TYPES:
            raise ValueError(
                f"Unsupported package type '{package_type}', expected one of {PACKAGE_TYPES}"
            )
        package = self._packages.get(package_type)
        if package is None:
            if file_name is None:
                stem = f"{self._name}-{self.version}" if self.version else self._name
                file_name = f"{stem}.{package_type}"
            package = ZipPackage(
                self.target_dir / file_name,
                base_dir=self.base_dir,
                compression=compression,
            )
            self._packages[package_type] = package
        package.include(*include)
        return package

    def on_package(self, callback: Callable[["BuildUnit"], Any]) -> None:
        """Run callback after packaging, before the check phase."""
        self._package_callbacks.append(callback)

    def check(
        self,
        subject_or_description: Any = None,
        description: Optional[str] = None,
        assertion: Optional[Assertion] = None,
    ) -> Expectation:
        """Register an expectation, evaluated in the check phase of invoke()."""
        return self._expectations.register(
            subject_or_description, description, assertion
        )

    def invoke(self) -> VerificationReport:
        """Build, package and check this unit.

        Raises VerificationFailure if any expectation failed.
        """
        # a target added to the build twice is still built once per invoke
        for target in dict.fromkeys(self._build_steps):
            logger.debug(f"Building {target}")
            target.invoke()
        for package in self._packages.values():
            package.produce()
        for callback in self._package_callbacks:
            callback(self)
        logger.debug(f"Checking {self._name}: {len(self._expectations)} expectations")
        return VerificationRunner(self).run()
