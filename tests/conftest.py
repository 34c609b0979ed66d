"""Shared pytest fixtures for arith tests."""

import pytest

from arith.core.settings import INT_BITS_ENV_VAR, PRIORITIES_ENV_VAR, UNKNOWN_CHARS_ENV_VAR


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's arith.toml or ARITH_* variables out of the tests."""
    for name in (UNKNOWN_CHARS_ENV_VAR, PRIORITIES_ENV_VAR, INT_BITS_ENV_VAR, "ARITH_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
