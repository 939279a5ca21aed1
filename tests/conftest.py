from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    for name in ("PARLEY_API_CHAT_URL", "PARLEY_LOG_LEVEL", "PARLEY_TOP", "PARLEY_DEFAULT_PROMPTS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
