"""Tests for the configuration module."""

from pathlib import Path

import pytest

from storydag._cli.config import (
    ConfigError,
    StorydagConfig,
    find_pyproject_toml,
    get_config,
    load_config,
)


class TestFindPyprojectToml:
    """Tests for find_pyproject_toml function."""

    def test_finds_in_current_directory(self, tmp_path: Path) -> None:
        """Should find pyproject.toml in current directory."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        assert find_pyproject_toml(tmp_path) == pyproject.resolve()

    def test_finds_in_parent_directory(self, tmp_path: Path) -> None:
        """Should find pyproject.toml in parent directory."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        subdir = tmp_path / "story" / "drafts"
        subdir.mkdir(parents=True)

        assert find_pyproject_toml(subdir) == pyproject.resolve()


class TestLoadConfig:
    """Tests for loading [tool.storydag]."""

    def test_no_section(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        config = load_config(pyproject)

        assert config == StorydagConfig(project_root=tmp_path)

    def test_full_section(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(
            """
[tool.storydag]
input = "story/heist.toml"
output = "/abs/analysis.toml"
rankdir = "LR"
labels = false
""",
        )

        config = load_config(pyproject)

        assert config.input == tmp_path / "story" / "heist.toml"
        assert config.output == Path("/abs/analysis.toml")
        assert config.rankdir == "LR"
        assert config.labels is False

    def test_invalid_toml(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.storydag\n")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(pyproject)

    def test_input_must_be_string(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.storydag]\ninput = 3\n")

        with pytest.raises(ConfigError, match="input: expected string path"):
            load_config(pyproject)

    def test_unknown_rankdir(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.storydag]\nrankdir = "UP"\n')

        with pytest.raises(ConfigError, match="rankdir"):
            load_config(pyproject)

    def test_labels_must_be_boolean(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.storydag]\nlabels = "yes"\n')

        with pytest.raises(ConfigError, match="labels: expected boolean"):
            load_config(pyproject)


class TestGetConfig:
    def test_reads_from_working_directory(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.storydag]\nrankdir = "BT"\n')
        monkeypatch.chdir(tmp_path)

        assert get_config().rankdir == "BT"
