"""Shared test fixtures and configuration."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from sheet_rows.config import _test_hooks


@pytest.fixture(autouse=True)
def _restore_config_hooks() -> Generator[None, None, None]:
    """Restore config hooks after each test."""
    original_get_env = _test_hooks.get_env
    yield
    _test_hooks.get_env = original_get_env
