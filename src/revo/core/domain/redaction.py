"""Best-effort textual redaction of secret-looking values.

This is a regex pass over raw text, not a parser: ``token = abc`` becomes
``token: [REDACTED]`` wherever it appears, and a quoted value keeps its
quotes (``"apiKey": "sk-1"`` becomes ``"apiKey": "[REDACTED]"``). Values
written in other shapes pass through untouched.
"""

from __future__ import annotations

import re


REDACTION_MARKER = "[REDACTED]"
SENSITIVE_PLACEHOLDER = "[REDACTED - sensitive file]"

SECRET_PATTERN = re.compile(
    r"(api[_-]?key|apikey|secret|password|token)(['\"]?)\s*[:=]\s*(['\"]?)([^\s'\";,#]+)['\"]?",
    re.IGNORECASE,
)

# Env templates (.env.example and friends) hold placeholders and stay fetchable.
SENSITIVE_PATH_PATTERN = re.compile(
    r"(^|/)\.(env|secrets|credentials)(?!\.(example|sample|template|dist)$)(\.[^/]*)?$",
    re.IGNORECASE,
)


def _replacement(match: re.Match[str]) -> str:
    key, key_quote, value_quote = match.group(1), match.group(2), match.group(3)
    return f"{key}{key_quote}: {value_quote}{REDACTION_MARKER}{value_quote}"


def _redact(text: str) -> tuple[str, list[tuple[int, int]]]:
    """Redact ``text`` and return the output spans of every replacement."""
    parts: list[str] = []
    spans: list[tuple[int, int]] = []
    pos = 0
    size = 0
    for match in SECRET_PATTERN.finditer(text):
        before = text[pos:match.start()]
        replacement = _replacement(match)
        size += len(before)
        spans.append((size, size + len(replacement)))
        size += len(replacement)
        parts.append(before)
        parts.append(replacement)
        pos = match.end()
    parts.append(text[pos:])
    return "".join(parts), spans


def redact_secrets(text: str) -> str:
    return _redact(text)[0]


def is_sensitive_path(path: str) -> bool:
    """True for dotfiles named after env files, secrets or credentials."""
    return SENSITIVE_PATH_PATTERN.search(path) is not None


def make_snippet(text: str, max_length: int) -> str:
    """Redact, then truncate to ``max_length`` characters.

    A redacted span that would straddle the cut is dropped whole, so a
    snippet never ends in a key name with its marker cut away.
    """
    redacted, spans = _redact(text)
    cut = max_length
    for start, end in spans:
        if start < cut < end:
            cut = start
            break
    return redacted[:cut]
