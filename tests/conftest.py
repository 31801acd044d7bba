from __future__ import annotations

import pytest

from slidev_mcp.common.utils import ENV_PREFIX

CONFIG_VARS = [f"{ENV_PREFIX}{name}" for name in ("TRANSPORT", "HOST", "PORT", "LOG_LEVEL")]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    # setenv + delenv so teardown also removes values loaded from .env files
    for name in CONFIG_VARS:
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    return monkeypatch
