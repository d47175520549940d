"""Shared pytest fixtures for treecalc tests."""

import pytest

from treecalc.core.settings import LOG_LEVEL_ENV_VAR, MAX_DEPTH_ENV_VAR


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep TREECALC_* variables from the outer environment out of tests."""
    monkeypatch.delenv(MAX_DEPTH_ENV_VAR, raising=False)
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)
