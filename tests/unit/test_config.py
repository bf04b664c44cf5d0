"""Tests for configuration loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from invocation_analyzer.config import (
    AnalyzerConfig,
    find_project_root,
    get_user_config_dir,
    load_config,
    load_config_dir,
    load_json_config,
    load_yaml_config,
    parse_output_modes,
    resolve_profile_path,
)
from invocation_analyzer.errors import ConfigurationError


class TestAnalyzerConfig:
    def test_defaults(self) -> None:
        c = AnalyzerConfig()
        assert c.profile_path is None
        assert c.output_modes == {"all_data"}
        assert c.requested_data == []
        assert c.plaintext is False
        assert c.debug is False

    def test_slots(self) -> None:
        c = AnalyzerConfig()
        with pytest.raises(AttributeError):
            c.nonexistent = "value"  # type: ignore[attr-defined]


class TestFindProjectRoot:
    def test_finds_git_dir(self, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()
        sub = tmp_path / "sub" / "deep"
        sub.mkdir(parents=True)
        assert find_project_root(sub) == tmp_path

    def test_finds_config_dir(self, tmp_path: Path) -> None:
        (tmp_path / ".invocation-analyzer").mkdir()
        assert find_project_root(tmp_path) == tmp_path


class TestConfigFiles:
    def test_json(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"plaintext": True}))
        assert load_json_config(path) == {"plaintext": True}

    def test_json_invalid(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text("{not json")
        assert load_json_config(path) == {}

    def test_yaml_missing(self, tmp_path: Path) -> None:
        assert load_yaml_config(tmp_path / "nope.yaml") == {}

    def test_yaml_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")
        assert load_yaml_config(path) == {}

    def test_dir_prefers_yaml(self, tmp_path: Path) -> None:
        (tmp_path / "config.yaml").write_text("verbose: true\n")
        (tmp_path / "config.json").write_text(json.dumps({"verbose": False}))
        assert load_config_dir(tmp_path) == {"verbose": True}

    def test_user_config_dir(self, isolated_env: Path) -> None:
        assert get_user_config_dir() == isolated_env / ".invocation-analyzer"


class TestParseOutputModes:
    def test_comma_separated(self) -> None:
        assert parse_output_modes("all_data, USED_DATA") == {"all_data", "used_data"}

    def test_list(self) -> None:
        assert parse_output_modes(["used_data", "all_data,used_data"]) == {"all_data", "used_data"}

    def test_blank(self) -> None:
        assert parse_output_modes(" , ") == set()

    def test_unknown(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown output mode 'everything'"):
            parse_output_modes("everything")


class TestResolveProfilePath:
    def test_absolute(self, tmp_path: Path) -> None:
        assert resolve_profile_path(str(tmp_path / "p.json"), "/elsewhere") == tmp_path / "p.json"

    def test_relative_to_working_dir(self, isolated_env: Path, tmp_path: Path) -> None:
        assert resolve_profile_path("p.json", str(tmp_path)) == tmp_path / "p.json"

    def test_build_working_directory_wins(
        self, isolated_env: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("BUILD_WORKING_DIRECTORY", str(tmp_path / "invoked"))
        assert resolve_profile_path("p.json", str(tmp_path)) == tmp_path / "invoked" / "p.json"


class TestLoadConfig:
    def test_defaults(self, isolated_env: Path, tmp_path: Path) -> None:
        work = tmp_path / "work"
        work.mkdir()
        config = load_config(working_dir=str(work))
        assert config.output_modes == {"all_data"}
        assert config.working_directory == str(work)

    def test_user_then_project(self, isolated_env: Path, tmp_path: Path) -> None:
        user_dir = isolated_env / ".invocation-analyzer"
        user_dir.mkdir()
        (user_dir / "config.yaml").write_text("verbose: true\nplaintext: true\n")

        project = tmp_path / "project"
        (project / ".invocation-analyzer").mkdir(parents=True)
        (project / ".invocation-analyzer" / "config.yaml").write_text(
            "plaintext: false\nmode: used_data\ndata: TotalDuration\n"
        )

        config = load_config(working_dir=str(project))
        assert config.verbose is True
        assert config.plaintext is False
        assert config.output_modes == {"used_data"}
        assert config.requested_data == ["TotalDuration"]

    def test_env_overrides_files(
        self, isolated_env: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        project = tmp_path / "project"
        (project / ".invocation-analyzer").mkdir(parents=True)
        (project / ".invocation-analyzer" / "config.json").write_text(
            json.dumps({"debug": True, "modes": ["all_data"]})
        )
        monkeypatch.setenv("IA_DEBUG", "no")
        monkeypatch.setenv("IA_OUTPUT_MODE", "used_data")
        monkeypatch.setenv("NO_COLOR", "1")

        config = load_config(working_dir=str(project))
        assert config.debug is False
        assert config.output_modes == {"used_data"}
        assert config.plaintext is True

    def test_cli_overrides_env(
        self, isolated_env: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("IA_OUTPUT_MODE", "used_data")
        config = load_config(
            cli_args={"output_modes": ["all_data"], "profile_path": "p.json"},
            working_dir=str(tmp_path),
        )
        assert config.output_modes == {"all_data"}
        assert config.profile_path == "p.json"

    def test_unknown_mode_in_file(self, isolated_env: Path, tmp_path: Path) -> None:
        project = tmp_path / "project"
        (project / ".invocation-analyzer").mkdir(parents=True)
        (project / ".invocation-analyzer" / "config.yaml").write_text("mode: sometimes\n")
        with pytest.raises(ConfigurationError):
            load_config(working_dir=str(project))
