import pytest
from pathlib import Path
from helpers import mark_by_dir


TESTS = Path(__file__).parent

def pytest_collection_modifyitems(config, items):
    # Mark tests by directory structure
    mark_by_dir(items, TESTS / "revo" / "core", pytest.mark.unit)
    mark_by_dir(items, TESTS / "revo" / "infra", pytest.mark.integration)
    mark_by_dir(items, TESTS / "revo" / "app", pytest.mark.e2e)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    # Keep a developer's REVO_* variables and .env out of AppConfig()
    import os
    for key in list(os.environ):
        if key.startswith("REVO_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("REVO_DIRECTORIES__HOME", str(tmp_path / "revo-home"))
    yield
