"""Tests for the grc-report CLI."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from grc_report.cli.main import app

runner = CliRunner()

ROWS = [
    ["Organizational", "5.1", "A.5.1", "Are policies approved?", "1", "3", ""],
    ["Organizational", "5.2", "A.5.2", "Are roles defined?", "2", "2", ""],
]


def _rows_file(tmp_path):
    path = tmp_path / "rows.json"
    path.write_text(json.dumps(ROWS), encoding="utf-8")
    return path


class TestCompose:
    def test_writes_report_to_directory(self, tmp_path) -> None:
        template = tmp_path / "template.html"
        template.write_text("<p>Intro</p>{{GAP_ASSESSMENT_TABLE}}", encoding="utf-8")
        out_dir = tmp_path / "out"
        out_dir.mkdir()

        result = runner.invoke(
            app, ["compose", str(_rows_file(tmp_path)), "--template", str(template), "--output", str(out_dir)]
        )
        assert result.exit_code == 0, result.output
        assert (out_dir / "Maturity-Assessment-Report.pdf").read_bytes()[:5] == b"%PDF-"
        assert "Loaded 2 assessment row(s)" in result.output

    def test_uses_org_template_from_store(self, tmp_path) -> None:
        store = tmp_path / "store"
        template = tmp_path / "t.html"
        template.write_text("<p>Org</p>", encoding="utf-8")
        runner.invoke(app, ["template", "save", "org-1", str(template), "--store-path", str(store)])

        target = tmp_path / "report.pdf"
        result = runner.invoke(
            app,
            ["compose", str(_rows_file(tmp_path)), "--org", "org-1", "--store-path", str(store), "-o", str(target)],
        )
        assert result.exit_code == 0, result.output
        assert target.is_file()
        assert "placeholder" in result.output

    def test_bad_rows_file_exits_nonzero(self, tmp_path) -> None:
        bad = tmp_path / "rows.json"
        bad.write_text("not json", encoding="utf-8")
        result = runner.invoke(app, ["compose", str(bad), "-o", str(tmp_path)])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_invalid_page_size_exits_nonzero(self, tmp_path) -> None:
        result = runner.invoke(app, ["compose", str(_rows_file(tmp_path)), "--page-size", "a0", "-o", str(tmp_path)])
        assert result.exit_code == 1


class TestLevels:
    def test_lists_scale(self) -> None:
        result = runner.invoke(app, ["levels"])
        assert result.exit_code == 0
        assert "Maturity Levels" in result.output
        assert "NA" in result.output


class TestScores:
    def test_prints_averages(self, tmp_path) -> None:
        items = tmp_path / "items.json"
        items.write_text(
            json.dumps({"items": [
                {"question": "MFA?", "currentMaturityLevel": "1", "targetMaturityLevel": "3"},
                {"question": "Backups?", "currentMaturityLevel": "2", "targetMaturityLevel": "2"},
            ]}),
            encoding="utf-8",
        )
        result = runner.invoke(app, ["scores", str(items)])
        assert result.exit_code == 0
        assert "2 item(s), 1 with a gap" in result.output
        assert "1.50" in result.output
        assert "2.50" in result.output

    def test_positional_rows_rejected(self, tmp_path) -> None:
        result = runner.invoke(app, ["scores", str(_rows_file(tmp_path))])
        assert result.exit_code == 1
        assert "expected an object" in result.output


class TestTemplateCommands:
    def test_show_default(self, tmp_path) -> None:
        result = runner.invoke(app, ["template", "show", "org-x", "--store-path", str(tmp_path)])
        assert result.exit_code == 0
        assert "{{GAP_ASSESSMENT_TABLE}}" in result.output

    def test_save_show_delete(self, tmp_path) -> None:
        template = tmp_path / "t.html"
        template.write_text("<h1>Acme</h1>{{GAP_ASSESSMENT_TABLE}}", encoding="utf-8")
        store = tmp_path / "store"

        saved = runner.invoke(app, ["template", "save", "acme", str(template), "--store-path", str(store)])
        assert saved.exit_code == 0
        shown = runner.invoke(app, ["template", "show", "acme", "--store-path", str(store)])
        assert "<h1>Acme</h1>" in shown.output

        deleted = runner.invoke(app, ["template", "delete", "acme", "--store-path", str(store)])
        assert deleted.exit_code == 0
        again = runner.invoke(app, ["template", "delete", "acme", "--store-path", str(store)])
        assert again.exit_code == 1

    def test_list_stored_organizations(self, tmp_path) -> None:
        template = tmp_path / "t.html"
        template.write_text("<p>x</p>", encoding="utf-8")
        store = tmp_path / "store"

        empty = runner.invoke(app, ["template", "list", "--store-path", str(store)])
        assert empty.exit_code == 0
        assert "No stored templates" in empty.output

        for org in ("globex", "acme"):
            runner.invoke(app, ["template", "save", org, str(template), "--store-path", str(store)])
        listed = runner.invoke(app, ["template", "list", "--store-path", str(store)])
        assert listed.exit_code == 0
        assert listed.output.split() == ["acme", "globex"]

    def test_save_missing_file(self, tmp_path) -> None:
        result = runner.invoke(app, ["template", "save", "acme", str(tmp_path / "nope.html"), "--store-path", str(tmp_path)])
        assert result.exit_code == 1
