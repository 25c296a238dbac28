"""Tests for the locpattern CLI."""

import json

import pytest
import yaml

from locpattern.engine.cli import main


class TestExpandCommand:
    def test_expand_json(self, capsys):
        """JSON output is the nested tree."""
        main(["expand", "X, Y{2}"])
        assert json.loads(capsys.readouterr().out) == [
            {"name": "X", "children": []},
            {"name": "Y1", "children": []},
            {"name": "Y2", "children": []},
        ]

    def test_expand_yaml(self, capsys):
        """YAML output carries the same tree."""
        main(["expand", "S1*(+-[1])", "--format", "yaml"])
        assert yaml.safe_load(capsys.readouterr().out) == [
            {"name": "S1", "children": [{"name": "S1-A", "children": []}]}
        ]

    def test_expand_names_parent_first(self, capsys):
        """Names output lists each parent before its children."""
        main(["expand", "A{2}*(+-[2])", "-f", "names", "--validate"])
        assert capsys.readouterr().out.split() == [
            "A1", "A1-A", "A1-B", "A2", "A2-A", "A2-B"
        ]

    def test_invalid_pattern_exits(self, capsys):
        """Malformed patterns exit 1 with the error on stderr."""
        with pytest.raises(SystemExit) as exc_info:
            main(["expand", "A{x}"])
        assert exc_info.value.code == 1
        assert "Error: Expected integer range count" in capsys.readouterr().err

    def test_huge_count_exits_cleanly(self, capsys):
        """An enormous count is a reported limit error, not a traceback."""
        with pytest.raises(SystemExit) as exc_info:
            main(["expand", "A{" + "9" * 5000 + "}"])
        assert exc_info.value.code == 1
        assert "more than 100000 locations" in capsys.readouterr().err


class TestLimitOptions:
    def test_max_nodes_flag(self, capsys):
        """--max-nodes lowers the cap."""
        with pytest.raises(SystemExit) as exc_info:
            main(["expand", "A{20}", "--max-nodes", "5"])
        assert exc_info.value.code == 1
        assert "more than 5 locations" in capsys.readouterr().err

    def test_limits_file(self, tmp_path, capsys):
        """--limits reads caps from YAML."""
        path = tmp_path / "limits.yaml"
        path.write_text("limits:\n  max_letters: 2\n")
        with pytest.raises(SystemExit):
            main(["expand", "A*(+-[3])", "--limits", str(path)])
        assert "Letter sequence exhausted" in capsys.readouterr().err

    def test_malformed_limits_file(self, tmp_path, capsys):
        """Broken YAML in the limits file is reported, not raised."""
        path = tmp_path / "limits.yaml"
        path.write_text("limits: [unclosed\n")
        with pytest.raises(SystemExit) as exc_info:
            main(["expand", "A", "--limits", str(path)])
        assert exc_info.value.code == 1
        assert "Invalid YAML in limits file" in capsys.readouterr().err


class TestParseCommand:
    def test_parse_reports_segments(self, capsys):
        """parse prints one entry per segment plus the total size."""
        main(["parse", "X, Z{3}*(+-[2])"])
        output = json.loads(capsys.readouterr().out)
        assert output["total_nodes"] == 10
        assert [s["kind"] for s in output["segments"]] == ["Literal", "Hierarchy"]
        assert output["segments"][1]["generator"]["count"] == 2


class TestAisleCommands:
    def test_aisles_prints_configs(self, capsys):
        """aisles prints the column and row counts per aisle."""
        main(["aisles", "A{4}*(+-[3]), B"])
        assert json.loads(capsys.readouterr().out) == [
            {"name": "A", "columns": 4, "rows": 3},
            {"name": "B", "columns": 1, "rows": 1},
        ]

    def test_aisles_rejects_non_aisle(self, capsys):
        """Segments with a range suffix are not aisles."""
        with pytest.raises(SystemExit) as exc_info:
            main(["aisles", "R-{3}-L"])
        assert exc_info.value.code == 1
        assert "does not describe an aisle" in capsys.readouterr().err

    def test_compose_from_yaml(self, tmp_path, capsys):
        """compose builds the pattern from a config list."""
        path = tmp_path / "aisles.yaml"
        path.write_text(
            "- {name: A, columns: 4, rows: 3}\n"
            "- {name: B, columns: 2}\n"
            "- {name: DOCK}\n"
        )
        main(["compose", str(path)])
        assert capsys.readouterr().out.strip() == "A{4}*(+-[3]), B{2}, DOCK"

    def test_compose_unknown_field(self, tmp_path, capsys):
        """Unknown config keys are reported."""
        path = tmp_path / "aisles.yaml"
        path.write_text("- {name: A, shelves: 4}\n")
        with pytest.raises(SystemExit) as exc_info:
            main(["compose", str(path)])
        assert exc_info.value.code == 1
        assert "Invalid aisle entry" in capsys.readouterr().err

    def test_compose_requires_list(self, tmp_path, capsys):
        """The aisle file must be a list of mappings."""
        path = tmp_path / "aisles.yaml"
        path.write_text("name: A\n")
        with pytest.raises(SystemExit):
            main(["compose", str(path)])
        assert "must contain a list" in capsys.readouterr().err
