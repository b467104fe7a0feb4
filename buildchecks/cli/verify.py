"""CLI commands for verifying build outputs."""

import json
from pathlib import Path

import click

from buildchecks.build.unit import BuildUnit
from buildchecks.cli.utils.logging import logger
from buildchecks.config import get_default_checks_file
from buildchecks.errors import ChecksFileError, VerificationFailure
from buildchecks.model.checks import load_checks, register_checks
from buildchecks.verification.runner import VerificationRunner


def _load_unit(ctx, checks_file, base_dir) -> BuildUnit:
    checks_path = Path(checks_file) if checks_file else get_default_checks_file()
    logger.info(f"Loading checks from: {checks_path}")
    try:
        checks = load_checks(checks_path)
    except ChecksFileError as e:
        logger.error(f"Error: {e}")
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    unit = BuildUnit(checks.name, base_dir=base_dir, version=checks.version)
    register_checks(unit, checks)
    return unit


@click.command("verify")
@click.argument("checks_file", required=False, type=click.Path(dir_okay=False))
@click.option(
    "--base-dir",
    "-d",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    help="Directory the paths in the checks file are relative to.",
    envvar="BUILDCHECKS_BASE_DIR",
)
@click.option(
    "--format",
    type=click.Choice(["summary", "json"], case_sensitive=False),
    default="summary",
    help="Output format for the verification report.",
)
@click.pass_context
def verify(ctx, checks_file, base_dir, format):
    """Evaluate every check against the built outputs.

    Exits with status 1 if any check failed. All checks are evaluated even
    after a failure, and every failure is reported.
    """
    unit = _load_unit(ctx, checks_file, base_dir)

    try:
        report = VerificationRunner(unit).run()
    except VerificationFailure as e:
        report = e.report

    if format == "json":
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        click.echo(report.summary())

    if not report.passed:
        ctx.exit(1)


@click.command("list")
@click.argument("checks_file", required=False, type=click.Path(dir_okay=False))
@click.option(
    "--base-dir",
    "-d",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    help="Directory the paths in the checks file are relative to.",
    envvar="BUILDCHECKS_BASE_DIR",
)
@click.pass_context
def list_checks(ctx, checks_file, base_dir):
    """List the checks in a checks file without evaluating them."""
    unit = _load_unit(ctx, checks_file, base_dir)
    for expectation in unit.expectations:
        click.echo(expectation.description)
