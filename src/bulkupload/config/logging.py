"""Root logger setup for services embedding the resolver."""

from __future__ import annotations

import logging

from .env import optional_env_var
from .errors import ConfigurationError

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_log_level(default: int = logging.INFO) -> int:
    """Level named by ``BULKUPLOAD_LOG_LEVEL`` (e.g. ``debug``), else ``default``."""

    raw = optional_env_var("BULKUPLOAD_LOG_LEVEL")
    if raw is None:
        return default
    level = logging.getLevelNamesMapping().get(raw.strip().upper())
    if level is None:
        raise ConfigurationError(f"Unknown log level {raw!r}")
    return level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Configure the root logger through ``logging.basicConfig``.

    Without an explicit ``level`` the environment decides (INFO by default).
    ``force=True`` replaces handlers installed earlier, e.g. by a test runner.
    """

    logging.basicConfig(
        level=get_log_level() if level is None else level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%dT%H:%M:%S",
        force=force,
    )
