"""Tests for payload assembly and the preview text."""
from revo.core.domain.models import FileSample, RepoMetadata, RepositoryIdentifier, SampleBatch
from revo.core.services import PayloadAssembler


def _meta(**kw):
    base = dict(name="octo/demo", description="d", stars=42, forks=7, language="Python", default_branch="main")
    base.update(kw)
    return RepoMetadata(**base)


def test_assemble_builds_payload_and_preview():
    batch = SampleBatch(samples=(FileSample("README.md", "# hi"), FileSample("a.py", "x")), requested=3, dropped=1)
    out = PayloadAssembler().assemble(repository=RepositoryIdentifier("octo", "demo"), metadata=_meta(), batch=batch)

    assert out.payload.repo == "octo/demo"
    assert out.payload.files_analyzed == 2
    assert out.dropped == 1
    assert out.preview == (
        "Repository: octo/demo\n"
        "Language: Python\n"
        "Stars: 42 | Forks: 7\n"
        "Files analyzed: 2\n"
        "Branch: main\n"
        "\n"
        "Ready for AI handoff"
    )


def test_preview_with_unknown_language():
    batch = SampleBatch(samples=(), requested=0, dropped=0)
    out = PayloadAssembler().assemble(
        repository=RepositoryIdentifier("octo", "demo"), metadata=_meta(language=None), batch=batch
    )
    assert "Language: -" in out.preview
    assert "Files analyzed: 0" in out.preview
    assert out.payload.to_dict()["samples"] == []
