"""buildchecks CLI"""

import click

from buildchecks import __version__
from buildchecks.cli.verify import list_checks, verify

from .debug import add_debug_option


@click.group()
@click.version_option(__version__, prog_name="buildchecks")
@click.pass_context
def cli(ctx):
    """
    Verify build outputs against declarative checks.
    """
    ctx.ensure_object(dict)


cli.add_command(add_debug_option(verify))
cli.add_command(add_debug_option(list_checks))

add_debug_option(cli)

if __name__ == "__main__":
    cli(obj={})
