"""Unit tests for QuartoRunner and StubRunner."""

import sys
from pathlib import Path

import pytest

from deckhand.contexts.rendering.exceptions import RunnerExhaustedError
from deckhand.contexts.rendering.resolver import ExecutableResolver
from deckhand.contexts.rendering.runners import QuartoRunner, StubRunner, preview_html

posix_only = pytest.mark.skipif(
    sys.platform == "win32", reason="fake executables are POSIX shell scripts"
)

# Fake Quarto builds use shell builtins only, so they work under any PATH
FAILING_QUARTO = '#!/bin/sh\necho "boom on $1" >&2\nexit 3\n'
RENDERING_QUARTO = '#!/bin/sh\n: > "${2%.*}.html"\n'
PATH_RECORDING_QUARTO = '#!/bin/sh\necho "$PATH" > path.txt\n'
VERSION_QUARTO = '#!/bin/sh\necho "1.4.550"\n'


class FixedResolver(ExecutableResolver):
    def __init__(self, candidates):
        super().__init__()
        self._candidates = [str(c) for c in candidates]

    def candidates(self):
        return list(self._candidates)


def fake_quarto(directory: Path, name: str, script: str) -> Path:
    path = directory / name
    path.write_text(script)
    path.chmod(0o755)
    return path


@pytest.fixture
def document(tmp_path):
    path = tmp_path / "talk_1.qmd"
    path.write_text("---\ntitle: T\n---\n\n## One\n")
    return path


@pytest.mark.unit
@posix_only
def test_first_successful_candidate_wins(tmp_path, document):
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    candidates = [
        bin_dir / "missing-quarto",
        fake_quarto(bin_dir, "broken-quarto", FAILING_QUARTO),
        fake_quarto(bin_dir, "quarto", RENDERING_QUARTO),
        fake_quarto(bin_dir, "never-reached", FAILING_QUARTO),
    ]

    QuartoRunner(resolver=FixedResolver(candidates)).render(document, tmp_path)

    assert (tmp_path / "talk_1.html").exists()


@pytest.mark.unit
@posix_only
def test_all_candidates_failing_reports_every_attempt(tmp_path, document):
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    missing = bin_dir / "missing-quarto"
    broken = fake_quarto(bin_dir, "broken-quarto", FAILING_QUARTO)

    with pytest.raises(RunnerExhaustedError) as exc_info:
        QuartoRunner(resolver=FixedResolver([missing, broken])).render(document, tmp_path)

    error = exc_info.value
    assert len(error.attempts) == 2
    assert error.attempts[0].startswith(f"{missing} -> err=")
    assert error.attempts[1] == f"{broken} -> exit=3, stderr=boom on render"
    assert " | " in str(error)
    assert str(missing) in str(error) and str(broken) in str(error)


@pytest.mark.unit
@posix_only
def test_search_path_override_replaces_child_path(tmp_path, document):
    quarto = fake_quarto(tmp_path, "quarto", PATH_RECORDING_QUARTO)
    runner = QuartoRunner(resolver=FixedResolver([quarto]), environ={"PATH": "/usr/bin"})

    runner.render(document, tmp_path, search_path="/only/here")

    assert (tmp_path / "path.txt").read_text().strip() == "/only/here"


@pytest.mark.unit
@posix_only
def test_child_runs_in_working_directory(tmp_path, document):
    work_dir = tmp_path / "work"
    work_dir.mkdir()
    quarto = fake_quarto(tmp_path, "quarto", PATH_RECORDING_QUARTO)

    QuartoRunner(resolver=FixedResolver([quarto])).render(document, work_dir)

    assert (work_dir / "path.txt").exists()


@pytest.mark.unit
@posix_only
def test_check_installation_returns_version(tmp_path):
    candidates = [tmp_path / "missing", fake_quarto(tmp_path, "quarto", VERSION_QUARTO)]

    assert QuartoRunner(resolver=FixedResolver(candidates)).check_installation() == "1.4.550"


@pytest.mark.unit
def test_check_installation_exhausted(tmp_path):
    candidates = [tmp_path / "missing-a", tmp_path / "missing-b"]

    with pytest.raises(RunnerExhaustedError, match="version") as exc_info:
        QuartoRunner(resolver=FixedResolver(candidates)).check_installation()

    assert len(exc_info.value.attempts) == 2


@pytest.mark.unit
def test_stub_success_writes_preview(tmp_path, document):
    StubRunner().render(document, tmp_path)

    output = (tmp_path / "talk_1.html").read_text()
    assert "<h2>One</h2>" in output
    assert "title: T" not in output


@pytest.mark.unit
def test_stub_success_with_other_extension(tmp_path, document):
    StubRunner(output_extension="pdf").render(document, tmp_path)

    assert (tmp_path / "talk_1.pdf").exists()
    assert not (tmp_path / "talk_1.html").exists()


@pytest.mark.unit
def test_stub_success_without_output(tmp_path, document):
    StubRunner(write_output=False).render(document, tmp_path)

    assert sorted(p.name for p in tmp_path.iterdir()) == ["talk_1.qmd"]


@pytest.mark.unit
def test_stub_failure_carries_message(tmp_path, document):
    with pytest.raises(RunnerExhaustedError, match="mocked quarto error"):
        StubRunner(succeed=False, error_message="mocked quarto error").render(document, tmp_path)


@pytest.mark.unit
def test_preview_html_escapes_and_skips_slide_separators():
    document = "---\ntitle: T\n---\n\n# A & B\n\n---\n\nx < y\n"
    output = preview_html(document)

    assert "<section><h1>A &amp; B</h1></section>" in output
    assert "<p>x &lt; y</p>" in output
    assert "---" not in output
