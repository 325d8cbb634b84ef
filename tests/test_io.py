"""Tests for timeline loading and analysis export."""

import tomllib
from pathlib import Path

import pytest

from storydag import DAG, TimelineError, analysis_to_dict, export_analysis, load_timeline

HEIST_TOML = """
title = "Heist"

[actors]
alice = ["briefing", "vault", "escape"]
bob = ["briefing", "getaway", "escape"]
"""


class TestLoadTimeline:
    def test_load_valid_timeline(self, tmp_path: Path) -> None:
        path = tmp_path / "heist.toml"
        path.write_text(HEIST_TOML)

        timeline = load_timeline(path)

        assert timeline.title == "Heist"
        assert timeline.actors["alice"] == ("briefing", "vault", "escape")
        assert timeline.actors["bob"] == ("briefing", "getaway", "escape")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.toml"
        path.write_text("[actors\nalice = [")

        with pytest.raises(TimelineError, match="Invalid TOML"):
            load_timeline(path)

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "latin1.toml"
        path.write_bytes(b'[actors]\nalice = ["\xff\xfe"]\n')

        with pytest.raises(TimelineError, match="Invalid TOML") as exc_info:
            load_timeline(path)
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_unreadable_path(self, tmp_path: Path) -> None:
        with pytest.raises(TimelineError, match="Cannot read") as exc_info:
            load_timeline(tmp_path / "missing.toml")
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_missing_actors(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.toml"
        path.write_text('title = "Nothing"\n')

        with pytest.raises(TimelineError, match="Invalid timeline") as exc_info:
            load_timeline(path)
        assert exc_info.value.__cause__ is not None

    def test_wrong_scene_type(self, tmp_path: Path) -> None:
        path = tmp_path / "wrong.toml"
        path.write_text("[actors]\nalice = [1, 2]\n")

        with pytest.raises(TimelineError, match="Invalid timeline"):
            load_timeline(path)


class TestAnalysisExport:
    def test_analysis_to_dict(self) -> None:
        dag = DAG({"a": {"b", "c"}, "b": {"d"}, "c": {"d"}, "d": set()})

        data = analysis_to_dict(dag, "Diamond")

        assert data == {
            "title": "Diamond",
            "size": 4,
            "initials": ["a"],
            "finals": ["d"],
            "order": ["a", "b", "c", "d"],
            "layers": [["a"], ["b", "c"], ["d"]],
            "edges": [["a", "b"], ["a", "c"], ["b", "d"], ["c", "d"]],
        }

    def test_title_is_omitted_when_missing(self) -> None:
        data = analysis_to_dict(DAG({"a": set()}))
        assert "title" not in data

    def test_export_analysis_writes_toml(self, tmp_path: Path) -> None:
        dag = DAG({"a": {"b"}, "b": set()})
        output = tmp_path / "out" / "analysis.toml"

        export_analysis(dag, output, "Pair")

        with output.open("rb") as f:
            data = tomllib.load(f)
        assert data["title"] == "Pair"
        assert data["order"] == ["a", "b"]
        assert data["layers"] == [["a"], ["b"]]
        assert data["edges"] == [["a", "b"]]
