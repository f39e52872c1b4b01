"""Shared fixtures for app-level tests."""
import pytest
from dependency_injector import providers

from revo.app.config import AppConfig, DirectoryConfig, GitHubConfig, LLMConfig, SamplingConfig
from revo.app.container import Container

from fakes import FakeGitHub, FakeGitHubFactory, FakeLLM, tree_doc


DEMO_FILES = {
    "README.md": "# Demo\nAPI_KEY=abc123\n",
    "package.json": '{"name": "demo"}',
    "src/index.js": "console.log('hi')",
    "image.png": "binary",
    "node_modules/x/y.js": "module.exports = 1",
    ".env": "TOKEN=secret",
}


@pytest.fixture
def test_config(tmp_path):
    """Create test configuration with explicit values."""
    return AppConfig(
        directories=DirectoryConfig(home=tmp_path),
        github=GitHubConfig(token="ghp_test"),
        llm=LLMConfig(api_key="test-key", provider_name="openai", model_name="gpt-4o-mini"),
        sampling=SamplingConfig(idle_delay=0.0, inline_batch_pause=0.0, run_timeout=10),
    )


@pytest.fixture
def fake_github():
    return FakeGitHub(trees={"main": tree_doc(*DEMO_FILES)}, files=dict(DEMO_FILES))


@pytest.fixture
def fake_llm():
    return FakeLLM(text="## Overview\nA demo project.", total_tokens=99, model="gpt-4o-mini")


def _create_mocked_container(config, github, llm) -> Container:
    container = Container()
    container.config.from_pydantic(config)
    container.github_factory.override(providers.Object(FakeGitHubFactory(github)))
    container.llm.override(providers.Object(llm))
    container.init_resources()
    return container


@pytest.fixture
def mock_container(test_config, fake_github, fake_llm, monkeypatch):
    """Patch Container construction in the facade and the CLI with fakes."""
    def create():
        container = Container()
        container.github_factory.override(providers.Object(FakeGitHubFactory(fake_github)))
        container.llm.override(providers.Object(fake_llm))
        return container

    monkeypatch.setattr("revo.app.main.Container", create)
    monkeypatch.setattr("revo.app.cli.Container", create)
    return fake_github, fake_llm


@pytest.fixture
def container(test_config, fake_github, fake_llm):
    c = _create_mocked_container(test_config, fake_github, fake_llm)
    yield c
    c.shutdown_resources()
