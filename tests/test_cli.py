"""Smoke tests for the CLI."""

import json
from pathlib import Path

import jwt
import pytest
from typer.testing import CliRunner

from artfolio import __version__
from artfolio.cli import app


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated working directory with no config file or env overrides."""
    monkeypatch.chdir(tmp_path)
    for var in ("ARTFOLIO_DATA_DIR", "ARTFOLIO_ARTIFACT_DIR", "ARTFOLIO_JWT_SECRET"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


def _invoke(runner: CliRunner, workdir: Path, *args: str):
    return runner.invoke(
        app,
        [
            "--data-dir",
            str(workdir / "data"),
            "--artifact-dir",
            str(workdir / "artifacts"),
            *args,
        ],
    )


def _survey_file(workdir: Path, answers: dict) -> str:
    path = workdir / "survey.json"
    path.write_text(json.dumps(answers), encoding="utf-8")
    return str(path)


class TestCLI:
    """Tests for the CLI entry point."""

    def test_main_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "compile" in result.output

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_show_creates_state(self, runner: CliRunner, workdir: Path) -> None:
        result = _invoke(runner, workdir, "show", "artist-a")
        assert result.exit_code == 0
        assert '"artist": "artist-a"' in result.output
        assert (workdir / "data").exists()


class TestEditingFlow:
    """Survey, compile, edit, publish and render through the CLI."""

    def test_full_flow(self, runner: CliRunner, workdir: Path) -> None:
        answers = _survey_file(workdir, {"medium": "painting", "layouts": {"homepage": "hero"}})

        result = _invoke(runner, workdir, "survey", "artist-a", answers)
        assert result.exit_code == 0, result.output
        assert "version 2" in result.output

        result = _invoke(runner, workdir, "compile", "artist-a")
        assert result.exit_code == 0, result.output
        assert "/sites/artist-a/site.json" in result.output
        assert (workdir / "artifacts" / "sites" / "artist-a" / "site.json").exists()

        result = _invoke(
            runner, workdir, "edit", "artist-a", "homeContent.title", "Night Studio", "--compile"
        )
        assert result.exit_code == 0, result.output
        assert "version 3" in result.output

        result = _invoke(runner, workdir, "publish", "artist-a", "night-studio")
        assert result.exit_code == 0, result.output
        assert "night-studio" in result.output

        result = _invoke(runner, workdir, "render", "artist-a")
        assert result.exit_code == 0, result.output
        assert "Night Studio" in result.output
        assert "home-hero" in result.output
        assert "contenteditable" not in result.output

    def test_render_to_file(self, runner: CliRunner, workdir: Path) -> None:
        _invoke(runner, workdir, "show", "artist-a")
        _invoke(runner, workdir, "compile", "artist-a")
        out = workdir / "site" / "about.html"

        result = _invoke(runner, workdir, "render", "artist-a", "about", "-o", str(out))

        assert result.exit_code == 0, result.output
        assert "about-" in out.read_text(encoding="utf-8")

    def test_render_before_compile(self, runner: CliRunner, workdir: Path) -> None:
        result = _invoke(runner, workdir, "render", "artist-a")
        assert result.exit_code == 1
        assert "No compiled site" in result.output

    def test_stale_version(self, runner: CliRunner, workdir: Path) -> None:
        _invoke(runner, workdir, "show", "artist-a")
        _invoke(runner, workdir, "edit", "artist-a", "homeContent.title", "One")

        result = _invoke(
            runner,
            workdir,
            "edit",
            "artist-a",
            "homeContent.title",
            "Two",
            "--expect-version",
            "1",
        )

        assert result.exit_code == 1
        assert "server is at version 2" in result.output

    def test_disallowed_path(self, runner: CliRunner, workdir: Path) -> None:
        result = _invoke(runner, workdir, "edit", "artist-a", "surveyData.medium", "x")
        assert result.exit_code == 1
        assert "Path not allowed" in result.output

    def test_compile_unknown_artist(self, runner: CliRunner, workdir: Path) -> None:
        result = _invoke(runner, workdir, "compile", "nobody")
        assert result.exit_code == 1
        assert "Website state not found" in result.output

    def test_survey_invalid_json(self, runner: CliRunner, workdir: Path) -> None:
        bad = workdir / "bad.json"
        bad.write_text("{nope", encoding="utf-8")
        result = _invoke(runner, workdir, "survey", "artist-a", str(bad))
        assert result.exit_code == 1
        assert "not valid JSON" in result.output

    def test_start_over(self, runner: CliRunner, workdir: Path) -> None:
        _invoke(runner, workdir, "show", "artist-a")
        _invoke(runner, workdir, "compile", "artist-a")

        result = _invoke(runner, workdir, "start-over", "artist-a")

        assert result.exit_code == 0, result.output
        assert not (workdir / "artifacts" / "sites" / "artist-a" / "site.json").exists()


class TestToken:
    def test_token_decodes_with_default_secret(self, runner: CliRunner, workdir: Path) -> None:
        result = _invoke(runner, workdir, "token", "artist-a", "--ttl", "5")
        assert result.exit_code == 0
        payload = jwt.decode(result.output.strip(), "dev-insecure-secret", algorithms=["HS256"])
        assert payload["artist"] == {"id": "artist-a"}
        assert payload["exp"] - payload["iat"] == 300
