"""Tests for location presets."""

import json

import pytest

from locpattern.engine import ExpansionLimits, LimitExceededError, flatten, tree_to_dicts
from tools.loc_presets import (
    PresetError,
    expand_preset,
    get_preset_info,
    list_presets,
    render_preset,
)
from tools.loc_presets.cli import main, parse_params

EXPECTED_PRESETS = [
    "single_range",
    "shelves_with_bins",
    "zone_aisles",
    "named_locations",
]


class TestListPresets:
    def test_list_returns_presets(self):
        """Should return list of available presets."""
        presets = list_presets()
        assert isinstance(presets, list)
        assert len(presets) >= 4

    def test_all_expected_presets_exist(self):
        """All documented presets should exist."""
        presets = list_presets()
        for expected in EXPECTED_PRESETS:
            assert expected in presets, f"Missing preset: {expected}"

    def test_get_preset_info(self):
        """Should return preset details."""
        info = get_preset_info("shelves_with_bins")
        assert "description" in info
        assert "parameters" in info
        assert "template" in info

    def test_get_preset_info_unknown_raises(self):
        """Unknown preset should raise PresetError."""
        with pytest.raises(PresetError, match="Unknown preset"):
            get_preset_info("nonexistent_preset")

    @pytest.mark.parametrize("name", EXPECTED_PRESETS)
    def test_examples_expand(self, name):
        """Every preset's documented example expands cleanly."""
        info = get_preset_info(name)
        assert len(expand_preset(name, info["example"])) > 0


class TestRenderPreset:
    def test_render_single_range(self):
        """Template braces stay literal around rendered variables."""
        assert render_preset("single_range", {"prefix": "DOCK", "count": 8}) == "DOCK{8}"

    def test_render_with_defaults(self):
        """Default values should be applied."""
        pattern = render_preset("shelves_with_bins", {"prefix": "20", "shelves": 2})
        assert pattern == "20{2}*(+-[2])"

    def test_render_zone_aisles(self):
        """One hierarchy segment per aisle."""
        pattern = render_preset(
            "zone_aisles",
            {"zone_code": "EST", "aisles": 2, "shelves": 12, "bins": 4},
        )
        assert pattern == "EST-1{12}*(+-[4]), EST-2{12}*(+-[4])"

    def test_render_zone_aisles_without_bins(self):
        """bins=0 drops the child generator."""
        pattern = render_preset(
            "zone_aisles", {"zone_code": "EST", "aisles": 2, "shelves": 3}
        )
        assert pattern == "EST-1{3}, EST-2{3}"

    def test_render_named_locations_list(self):
        pattern = render_preset("named_locations", {"codes": ["RECV", "SHIP"]})
        assert pattern == "RECV, SHIP"

    def test_render_named_locations_string(self):
        pattern = render_preset("named_locations", {"codes": "RECV, SHIP"})
        assert pattern == "RECV, SHIP"

    def test_missing_required_param_raises(self):
        """Missing required parameter should raise PresetError."""
        with pytest.raises(PresetError, match="Missing required parameter"):
            render_preset("shelves_with_bins", {"shelves": 2})

    def test_unknown_preset_raises(self):
        """Unknown preset should raise PresetError."""
        with pytest.raises(PresetError, match="Unknown preset"):
            render_preset("nonexistent_preset", {})


class TestExpandPreset:
    def test_expand_shelves_with_bins(self):
        nodes = expand_preset("shelves_with_bins", {"prefix": "20", "shelves": 2})
        assert tree_to_dicts(nodes)[0] == {
            "name": "201",
            "children": [
                {"name": "201-A", "children": []},
                {"name": "201-B", "children": []},
            ],
        }

    def test_expand_zone_aisles(self):
        """Codes read ZONE-<aisle><shelf>-<bin>."""
        nodes = expand_preset(
            "zone_aisles",
            {"zone_code": "EST", "aisles": 3, "shelves": 12, "bins": 4},
        )
        assert len(nodes) == 36
        assert nodes[0].name == "EST-101"
        assert nodes[-1].name == "EST-312"
        assert [c.name for c in nodes[1].children] == [
            "EST-102-A", "EST-102-B", "EST-102-C", "EST-102-D"
        ]

    def test_expand_respects_limits(self):
        with pytest.raises(LimitExceededError):
            expand_preset(
                "single_range",
                {"prefix": "X", "count": 100},
                ExpansionLimits(max_nodes=10),
            )


class TestCli:
    def test_parse_params_converts_numbers(self):
        assert parse_params(["prefix=A", "count=3", "ratio=0.5"]) == {
            "prefix": "A",
            "count": 3,
            "ratio": 0.5,
        }

    def test_parse_params_rejects_bad_format(self):
        with pytest.raises(PresetError, match="Invalid parameter format"):
            parse_params(["count"])

    def test_cli_expand_json(self, capsys):
        main(["expand", "single_range", "-p", "prefix=DOOR", "-p", "count=2"])
        output = json.loads(capsys.readouterr().out)
        assert output == [
            {"name": "DOOR1", "children": []},
            {"name": "DOOR2", "children": []},
        ]

    def test_cli_expand_names(self, capsys):
        main([
            "expand", "shelves_with_bins",
            "-p", "prefix=S", "-p", "shelves=1", "-p", "bins=2",
            "--format", "names",
        ])
        assert capsys.readouterr().out.split() == ["S1", "S1-A", "S1-B"]

    def test_cli_pattern_format(self, capsys):
        main(["expand", "single_range", "-p", "prefix=A", "-p", "count=4", "-f", "pattern"])
        assert capsys.readouterr().out.strip() == "A{4}"

    def test_cli_list(self, capsys):
        main(["list"])
        out = capsys.readouterr().out
        assert "Available presets:" in out
        assert "zone_aisles" in out

    def test_cli_info_shows_rendered_example(self, capsys):
        main(["info", "shelves_with_bins"])
        out = capsys.readouterr().out
        assert "Preset: shelves_with_bins" in out
        assert "-> 20{2}*(+-[2])" in out

    def test_cli_error_exits_nonzero(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["expand", "single_range", "-p", "prefix=A", "-p", "count=x"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_flatten_matches_names_output(self):
        nodes = expand_preset("shelves_with_bins", {"prefix": "S", "shelves": 1})
        assert flatten(nodes) == ["S1", "S1-A", "S1-B"]
