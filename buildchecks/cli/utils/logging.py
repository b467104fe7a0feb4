import logging
import sys


logger = logging.getLogger("buildchecks")

HANDLER_NAME = "buildchecks-cli"


def configure_logging(debug: bool):
    """
    Set the buildchecks log level for a CLI run.

    Reports are echoed to stdout, so log records go to stderr and never end up
    inside ``--format json`` output. Debug records are tagged with their level.
    """
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    formatter = logging.Formatter(
        "%(levelname)s %(message)s" if debug else "%(message)s"
    )

    for handler in logger.handlers:
        if handler.get_name() == HANDLER_NAME:
            handler.setFormatter(formatter)
            return

    if not logger.hasHandlers():
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
