"""Shared logging helpers for datajoin."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger for ``datajoin`` commands.

    Records go to stderr so the ``diff`` listing on stdout stays clean. The CLI
    calls this again with ``force=True`` once the level from
    ``DATAJOIN_LOG_LEVEL`` or ``--verbose`` is known.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
