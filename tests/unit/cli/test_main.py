"""
Unit tests for the uibuilder command-line interface.
"""

import json

import pytest

from uibuilder_cli.main import main


@pytest.fixture
def config_file(tmp_path, question_configuration):
    path = tmp_path / "form.json"
    path.write_text(
        json.dumps(question_configuration.model_dump(mode="json", by_alias=True, exclude_none=True))
    )
    return path


class TestHelp:
    """Tests for help and unknown commands"""

    def test_no_args_prints_help(self, capsys):
        assert main([]) == 0
        assert "Usage:" in capsys.readouterr().out

    def test_unknown_command(self, capsys):
        assert main(["publish"]) == 1
        assert "Unknown command: publish" in capsys.readouterr().err


class TestValidate:
    """Tests for 'uibuilder validate'"""

    def test_valid_file(self, config_file, capsys):
        assert main(["validate", str(config_file)]) == 0
        assert "'cfg-questions'" in capsys.readouterr().out

    def test_invalid_file(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"id": "c", "name": "C", "widgets": []}))

        assert main(["validate", str(path)]) == 1
        err = capsys.readouterr().err
        assert "missing required keys" in err
        assert "projectId" in err

    def test_missing_file(self, tmp_path, capsys):
        assert main(["validate", str(tmp_path / "absent.json")]) == 1
        assert "Cannot read" in capsys.readouterr().err

    def test_requires_path(self):
        assert main(["validate"]) == 1


class TestRender:
    """Tests for 'uibuilder render'"""

    def test_render_with_responses(self, config_file, tmp_path, capsys):
        responses = tmp_path / "answers.json"
        responses.write_text(json.dumps({"q1": "yes"}))

        assert main(["render", str(config_file), "--responses", str(responses)]) == 0
        rows = json.loads(capsys.readouterr().out)

        assert [row["id"] for row in rows] == ["q1", "q2"]
        assert rows[0]["value"] == "yes"
        assert rows[1]["value"] == ""
        assert rows[0]["error"] is None

    def test_render_reports_errors(self, config_file, capsys):
        assert main(["render", str(config_file)]) == 0
        rows = json.loads(capsys.readouterr().out)

        assert [row["id"] for row in rows] == ["q1"]
        assert rows[0]["error"] == "Is it relevant? is required"

    def test_bad_mode(self, config_file, capsys):
        assert main(["render", str(config_file), "--mode", "NIGHTLY"]) == 1

    def test_missing_option_value(self, config_file, capsys):
        assert main(["render", str(config_file), "--mode"]) == 1
        assert "--mode requires a value" in capsys.readouterr().err


class TestCatalog:
    """Tests for 'uibuilder catalog' and 'uibuilder templates'"""

    def test_category_filter(self, capsys):
        assert main(["catalog", "--category", "layout"]) == 0
        lines = capsys.readouterr().out.strip().splitlines()

        assert [line.split()[0] for line in lines] == ["DIVIDER", "SPACER", "CONTAINER"]

    def test_unknown_category(self, capsys):
        assert main(["catalog", "--category", "charts"]) == 1

    def test_templates(self, capsys):
        assert main(["templates"]) == 0
        assert "text-classification" in capsys.readouterr().out
