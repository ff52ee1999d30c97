"""Tests for the typer CLI commands that need no LLM."""

import pytest
from typer.testing import CliRunner

from writemotion.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text(
        f"library:\n  db_path: {tmp_path / 'personas.db'}\n", encoding="utf-8"
    )


class TestAuthorsCommand:
    def test_lists_builtins(self):
        result = runner.invoke(app, ["authors"])
        assert result.exit_code == 0
        assert "hemingway" in result.output
        assert "oliver" in result.output

    def test_query_filters(self):
        result = runner.invoke(app, ["authors", "--query", "sorkin"])
        assert result.exit_code == 0
        assert "sorkin" in result.output
        assert "hemingway" not in result.output

    def test_bad_sort(self):
        result = runner.invoke(app, ["authors", "--sort", "age"])
        assert result.exit_code == 1


class TestExportCommand:
    def test_export_markdown(self, tmp_path):
        draft = tmp_path / "draft.txt"
        draft.write_text("A short draft.", encoding="utf-8")
        result = runner.invoke(app, ["export", str(draft), str(tmp_path / "out.md")])
        assert result.exit_code == 0
        assert (tmp_path / "out.md").read_text(encoding="utf-8") == "A short draft."

    def test_export_unsupported(self, tmp_path):
        draft = tmp_path / "draft.txt"
        draft.write_text("A short draft.", encoding="utf-8")
        result = runner.invoke(app, ["export", str(draft), str(tmp_path / "out.docx")])
        assert result.exit_code == 1

    def test_missing_draft(self, tmp_path):
        result = runner.invoke(app, ["export", str(tmp_path / "nope.txt"), str(tmp_path / "out.md")])
        assert result.exit_code == 1


class TestRewriteCommand:
    def test_bad_tone_rejected_before_any_request(self, tmp_path):
        draft = tmp_path / "draft.txt"
        draft.write_text("Some draft text.", encoding="utf-8")
        result = runner.invoke(app, ["rewrite", str(draft), "-a", "hemingway", "--tone", "angry"])
        assert result.exit_code == 1

    def test_span_must_be_in_draft(self, tmp_path):
        draft = tmp_path / "draft.txt"
        draft.write_text("Some draft text.", encoding="utf-8")
        result = runner.invoke(app, ["rewrite", str(draft), "-a", "hemingway", "--span", "absent words"])
        assert result.exit_code == 1
