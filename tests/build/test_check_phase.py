"""End-to-end tests: declare a build unit, package it, and run its checks."""

import re
import zipfile

import pytest

from buildchecks.build import BuildUnit, FileTarget
from buildchecks.errors import VerificationFailure
from buildchecks.matchers import be_empty, contain, exist


def write_action(content=""):
    def action(target: FileTarget):
        target.path.write_text(content)

    return action


def mkdir_action(target: FileTarget):
    target.path.mkdir(parents=True, exist_ok=True)


def should_pass(unit):
    unit.invoke()


def should_fail(unit):
    with pytest.raises(VerificationFailure, match="Checks failed"):
        unit.invoke()


@pytest.fixture
def unit(tmp_path):
    return BuildUnit("foo", base_dir=tmp_path, version="1.0")


class TestCheckPhase:
    @pytest.mark.short
    def test_runs_after_package_callbacks(self, unit):
        calls = []
        unit.package("jar")
        unit.on_package(lambda u: calls.append("action"))
        unit.check(assertion=lambda it: calls.append("check"))

        should_pass(unit)

        assert calls == ["action", "check"]
        assert unit.package("jar").exists()

    @pytest.mark.short
    def test_executes_all_expectations(self, unit):
        calls = []
        unit.check(assertion=lambda it: calls.append("expectation"))

        should_pass(unit)

        assert calls == ["expectation"]

    @pytest.mark.short
    def test_succeeds_without_expectations(self, unit):
        should_pass(unit)

    @pytest.mark.short
    def test_fails_if_any_expectation_failed(self, unit):
        def sorry(it):
            raise RuntimeError("sorry")

        unit.check()
        unit.check(assertion=sorry)
        unit.check()

        should_fail(unit)

    @pytest.mark.short
    def test_each_invoke_uses_a_fresh_runner(self, unit):
        should_pass(unit)
        should_pass(unit)


class TestCheckRegistration:
    @pytest.mark.short
    def test_adds_expectation(self, unit):
        assert len(unit.expectations) == 0

        unit.check()

        assert len(unit.expectations) == 1

    @pytest.mark.short
    def test_no_arguments_is_expectation_against_unit(self, unit):
        expectation = unit.check(assertion=lambda it: None)

        assert expectation.subject is unit
        assert expectation.description == str(unit) == "foo"

    @pytest.mark.short
    def test_object_subject_with_description(self, unit):
        subject = unit.file("test")

        expectation = unit.check(subject, "should exist")

        assert expectation.subject is subject
        assert expectation.description == f"{subject} should exist"

    @pytest.mark.short
    def test_works_without_assertion(self, unit):
        unit.check("implement later")

        should_pass(unit)


class TestExist:
    @pytest.mark.short
    def test_passes_if_file_exists(self, unit):
        unit.build(unit.file("test", write_action()))
        unit.check(unit.file("test"), assertion=exist)

        should_pass(unit)

    @pytest.mark.short
    def test_fails_if_file_does_not_exist(self, unit):
        unit.check(unit.file("test"), assertion=exist)

        with pytest.raises(VerificationFailure) as excinfo:
            unit.invoke()

        assert str(unit.file("test")) in str(excinfo.value)
        assert len(excinfo.value.report.failures) == 1

    @pytest.mark.short
    def test_does_not_invoke_declared_target(self, unit, tmp_path):
        unit.file("test", write_action())
        unit.check(unit.file("test"), assertion=exist)

        should_fail(unit)
        assert not (tmp_path / "test").exists()

    @pytest.mark.short
    def test_passes_if_zip_path_exists(self, unit, write):
        write("resources/test")
        package = unit.package("jar", include=["resources"])
        unit.check(package.path("resources"), assertion=exist)

        should_pass(unit)

    @pytest.mark.short
    def test_fails_if_zip_path_does_not_exist(self, unit, tmp_path):
        (tmp_path / "resources").mkdir()
        package = unit.package("jar", include=["resources"])
        unit.check(package, assertion=lambda it: exist(it.path("not-resources")))

        should_fail(unit)

    @pytest.mark.short
    def test_passes_if_zip_entry_exists(self, unit, write):
        write("resources/test")
        package = unit.package("jar", include=["resources"])
        unit.check(package.entry("resources/test"), assertion=exist)
        unit.check(package.path("resources").entry("test"), assertion=exist)

        should_pass(unit)

    @pytest.mark.short
    def test_fails_if_zip_entry_does_not_exist(self, unit, tmp_path):
        (tmp_path / "resources").mkdir()
        package = unit.package("jar", include=["resources"])
        unit.check(package.entry("resources/test"), assertion=exist)

        should_fail(unit)


class TestBeEmpty:
    @pytest.mark.short
    def test_passes_if_file_has_no_content(self, unit):
        unit.build(unit.file("test", write_action()))
        unit.check(unit.file("test"), assertion=be_empty)

        should_pass(unit)

    @pytest.mark.short
    def test_fails_if_file_has_content(self, unit):
        unit.build(unit.file("test", write_action("something")))
        unit.check(unit.file("test"), assertion=be_empty)

        should_fail(unit)

    @pytest.mark.short
    def test_fails_if_file_does_not_exist(self, unit):
        unit.check(unit.file("test"), assertion=be_empty)

        should_fail(unit)

    @pytest.mark.short
    def test_passes_if_directory_is_empty(self, unit):
        unit.build(unit.file("test", mkdir_action))
        unit.check(unit.file("test"), assertion=be_empty)

        should_pass(unit)

    @pytest.mark.short
    def test_fails_if_directory_has_any_files(self, unit):
        def action(target):
            target.path.mkdir()
            (target.path / "file").write_text("")

        unit.build(unit.file("test", action))
        unit.check(unit.file("test"), assertion=be_empty)

        should_fail(unit)

    @pytest.mark.short
    def test_passes_if_zip_path_is_empty(self, unit, tmp_path):
        (tmp_path / "resources").mkdir()
        package = unit.package("jar", include=["resources"])
        unit.check(package.path("resources"), assertion=be_empty)

        should_pass(unit)

    @pytest.mark.short
    def test_fails_if_zip_path_has_any_entries(self, unit, write):
        write("resources/test")
        package = unit.package("jar", include=["resources"])
        unit.check(package.path("resources"), assertion=be_empty)

        should_fail(unit)

    @pytest.mark.short
    def test_passes_if_zip_entry_has_no_content(self, unit, write):
        write("resources/test")
        package = unit.package("jar", include=["resources"])
        unit.check(package.entry("resources/test"), assertion=be_empty)
        unit.check(package.path("resources").entry("test"), assertion=be_empty)

        should_pass(unit)

    @pytest.mark.short
    def test_fails_if_zip_entry_has_content(self, unit, write):
        write("resources/test", "something")
        package = unit.package("jar", include=["resources"])
        unit.check(package.entry("resources/test"), assertion=be_empty)

        should_fail(unit)

    @pytest.mark.short
    def test_fails_if_zip_entry_does_not_exist(self, unit, tmp_path):
        (tmp_path / "resources").mkdir()
        package = unit.package("jar", include=["resources"])
        unit.check(package.entry("resources/test"), assertion=be_empty)

        should_fail(unit)


class TestContainFile:
    @pytest.mark.short
    def test_passes_if_content_matches_string(self, unit):
        unit.build(unit.file("test", write_action("something")))
        unit.check(unit.file("test"), assertion=lambda it: contain(it, "thing"))

        should_pass(unit)

    @pytest.mark.short
    def test_passes_if_content_matches_all_patterns(self, unit):
        unit.build(unit.file("test", write_action("something\nor\nanother")))
        unit.check(
            unit.file("test"),
            assertion=lambda it: contain(it, re.compile("or"), re.compile("other")),
        )

        should_pass(unit)

    @pytest.mark.short
    def test_fails_unless_content_matches_all_patterns(self, unit):
        unit.build(unit.file("test", write_action("something")))
        unit.check(
            unit.file("test"),
            assertion=lambda it: contain(it, re.compile("some"), re.compile("other")),
        )

        should_fail(unit)

    @pytest.mark.short
    def test_fails_if_file_does_not_exist(self, unit):
        unit.check(
            unit.file("test"), assertion=lambda it: contain(it, re.compile("anything"))
        )

        should_fail(unit)


class TestContainDirectory:
    @pytest.mark.short
    def test_passes_if_directory_contains_glob(self, unit, write):
        write("resources/with/test")
        unit.check(unit.file("resources"), assertion=lambda it: contain(it, "**/t*st"))

        should_pass(unit)

    @pytest.mark.short
    def test_fails_unless_directory_contains_all(self, unit, write):
        write("resources/test")
        unit.check(
            unit.file("resources"),
            assertion=lambda it: contain(it, "test", "or-not"),
        )

        should_fail(unit)

    @pytest.mark.short
    def test_fails_if_directory_does_not_exist(self, unit):
        unit.check(unit.file("resources"), assertion=lambda it: contain(it))

        should_fail(unit)


class TestContainZip:
    @pytest.mark.short
    def test_zip_path_contains_file(self, unit, write):
        write("resources/test")
        package = unit.package("jar", include=["resources"])
        unit.check(package.path("resources"), assertion=lambda it: contain(it, "test"))

        should_pass(unit)

    @pytest.mark.short
    def test_handles_deep_nesting(self, unit, write):
        write("resources/test/test2.efx")
        package = unit.package("jar", include=["*"])
        unit.check(package, assertion=lambda it: contain(it, "resources/test/test2.efx"))
        unit.check(
            package.path("resources"),
            assertion=lambda it: contain(it, "test/test2.efx"),
        )
        unit.check(
            package.path("resources/test"),
            assertion=lambda it: contain(it, "test2.efx"),
        )

        should_pass(unit)

    @pytest.mark.short
    def test_zip_path_contains_all_globs(self, unit, write):
        write("resources/with/test")
        package = unit.package("jar", include=["resources"])
        unit.check(
            package.path("resources"),
            assertion=lambda it: contain(it, "**/test", "**/*"),
        )

        should_pass(unit)

    @pytest.mark.short
    def test_zip_path_fails_if_empty(self, unit, tmp_path):
        (tmp_path / "resources").mkdir()
        package = unit.package("jar", include=["resources"])
        unit.check(package.path("resources"), assertion=lambda it: contain(it, "test"))

        should_fail(unit)

    @pytest.mark.short
    def test_zip_entry_content(self, unit, write):
        write("resources/test", "something\nor\nanother")
        package = unit.package("jar", include=["resources"])
        unit.check(
            package.entry("resources/test"),
            assertion=lambda it: contain(it, "thing", re.compile("other")),
        )

        should_pass(unit)


class TestPackaging:
    @pytest.mark.short
    def test_package_name_and_location(self, unit, tmp_path):
        package = unit.package("zip")

        assert package.archive_path == tmp_path / "target" / "foo-1.0.zip"
        assert unit.package("zip") is package

    @pytest.mark.short
    def test_package_name_without_version(self, tmp_path):
        unit = BuildUnit("bar", base_dir=tmp_path)

        assert unit.package("jar").archive_path.name == "bar.jar"

    @pytest.mark.short
    def test_unsupported_package_type(self, unit):
        with pytest.raises(ValueError, match="Unsupported package type"):
            unit.package("tar")

    @pytest.mark.short
    def test_package_does_not_contain_itself(self, unit, write):
        write("resources/test")
        package = unit.package("zip", include=["*"])

        unit.invoke()

        with zipfile.ZipFile(package.archive_path) as zf:
            names = zf.namelist()
        assert "resources/test" in names
        assert not any(name.startswith("target") for name in names)

    @pytest.mark.short
    def test_file_targets_are_shared(self, unit):
        assert unit.file("test") is unit.file("test")


class TestBuildPhase:
    @pytest.mark.short
    def test_every_invoke_rebuilds_targets(self, unit):
        runs = []
        target = unit.file("out/report.txt", lambda t: runs.append(t))
        unit.build(target, target)

        unit.invoke()
        unit.invoke()

        assert runs == [target, target]

    @pytest.mark.short
    def test_rebuilt_target_is_checked_fresh(self, unit):
        contents = iter(["first", "second"])
        target = unit.file("out/report.txt", lambda t: t.path.write_text(next(contents)))
        unit.build(target)
        unit.invoke()

        unit.check(target, assertion=lambda it: contain(it, "second"))

        should_pass(unit)

    @pytest.mark.short
    def test_package_type_keyword(self, unit):
        assert unit.package(package_type="jar").archive_path.name == "foo-1.0.jar"
