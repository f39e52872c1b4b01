"""Tests for secret redaction and snippet building."""
import pytest

from revo.core.domain.redaction import (
    REDACTION_MARKER,
    is_sensitive_path,
    make_snippet,
    redact_secrets,
)


@pytest.mark.parametrize(
    "text",
    [
        "token: abc123",
        "TOKEN=abc123",
        "api_key = abc123",
        "apiKey: abc123",
        "api-key=abc123",
        "password:abc123",
        "client_secret = abc123;",
        "const config = { token: 'x', secret: abc123 }",
    ],
)
def test_secret_values_are_removed(text):
    out = redact_secrets(text)
    assert "abc123" not in out
    assert REDACTION_MARKER in out


def test_redaction_keeps_key_name():
    assert redact_secrets("password = hunter2") == f"password: {REDACTION_MARKER}"


def test_text_without_secrets_is_unchanged():
    text = "def main():\n    return 42\n"
    assert redact_secrets(text) == text


def test_quoted_values_keep_their_quotes():
    assert redact_secrets('token = "abc"') == f'token: "{REDACTION_MARKER}"'
    assert redact_secrets("PASSWORD='x';") == f"PASSWORD: '{REDACTION_MARKER}';"


def test_quoted_json_key():
    out = redact_secrets('{"apiKey": "sk-live-123", "name": "demo"}')
    assert out == f'{{"apiKey": "{REDACTION_MARKER}", "name": "demo"}}'


def test_shapes_outside_the_pattern_pass_through():
    # no separator between key and value
    assert redact_secrets("token abc") == "token abc"


class TestMakeSnippet:
    def test_truncates(self):
        assert make_snippet("x" * 50, 10) == "x" * 10

    def test_redacts_before_truncating(self):
        snippet = make_snippet("token=supersecretvalue" + "y" * 100, 20)
        assert "supersecret" not in snippet
        assert len(snippet) <= 20

    def test_short_text_untouched(self):
        assert make_snippet("hello", 1000) == "hello"

    def test_cut_never_splits_a_redaction(self):
        snippet = make_snippet("x" * 995 + "token: abc123", 1000)
        assert snippet == "x" * 995
        assert "abc123" not in snippet

    def test_redaction_within_cap_is_kept(self):
        snippet = make_snippet("x" * 10 + "token: abc123\n" + "y" * 50, 40)
        assert REDACTION_MARKER in snippet
        assert len(snippet) == 40


@pytest.mark.parametrize(
    "path",
    [".env", ".env.local", "config/.env", "deploy/.secrets", ".credentials", "app/.env.production"],
)
def test_sensitive_paths(path):
    assert is_sensitive_path(path)


@pytest.mark.parametrize(
    "path",
    ["env.py", "src/environment.ts", "README.md", "docs/secrets.md", ".env.example", "config/.env.sample", ".envrc"],
)
def test_regular_paths(path):
    assert not is_sensitive_path(path)
