"""Environment variable access shared by the config loaders.

Blank values count as unset everywhere.
"""

from __future__ import annotations

import os


def optional_env_var(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value
