import click

from .utils.logging import configure_logging


def _set_debug(ctx, param, value: bool):
    """Record the debug flag on the root context and apply it to logging."""
    root_ctx = ctx.find_root()
    root_ctx.ensure_object(dict)

    # `buildchecks --debug verify` keeps debug on: a subcommand's default
    # False never overrides the group flag.
    if value or ctx.parent is None or "DEBUG" not in root_ctx.obj:
        root_ctx.obj["DEBUG"] = value

    configure_logging(root_ctx.obj["DEBUG"])
    return root_ctx.obj["DEBUG"]


debug_option = click.option(
    "--debug/--no-debug",
    is_eager=True,
    expose_value=False,
    callback=_set_debug,
    help="Log archive reads and each evaluated check to stderr.",
)


def add_debug_option(cmd: click.Command) -> click.Command:
    """Add --debug to the group or to one of its commands."""
    if any(param.name == "debug" for param in cmd.params):
        return cmd
    return debug_option(cmd)
