"""Seams tests replace to feed sheet_rows settings without touching os.environ."""

from __future__ import annotations

import os
from collections.abc import Callable


def _read_process_env(key: str) -> str | None:
    return os.environ.get(key)


# Environment lookup used by load_settings; tests swap in a fixed mapping.
get_env: Callable[[str], str | None] = _read_process_env
