"""
Unit tests for step input reading and YAML config loading.
"""

import pytest

from setupgo.pipelines.inputs import InputReader, load_yaml_config


class TestInputReader:
    """Tests for InputReader.get_input()."""

    def test_override_wins(self):
        """Test explicit overrides take precedence over everything."""
        reader = InputReader(
            overrides={"version": "1.2.3"},
            environ={"task_input_version": "2.0.0"},
            config_inputs={"version": "3.0.0"},
        )

        assert reader.get_input("version") == "1.2.3"

    def test_none_override_ignored(self):
        """Test unset CLI flags do not hide other sources."""
        reader = InputReader(
            overrides={"version": None}, environ={"task_input_version": "2.0.0"}
        )

        assert reader.get_input("version") == "2.0.0"

    def test_environment_exact_then_upper(self):
        """Test both environment naming styles are accepted."""
        assert (
            InputReader(environ={"TASK_INPUT_CACHEREPOSITORY": "go-remote"}).get_input(
                "cacheRepository"
            )
            == "go-remote"
        )
        assert (
            InputReader(
                environ={
                    "task_input_cacheRepository": "exact",
                    "TASK_INPUT_CACHEREPOSITORY": "upper",
                }
            ).get_input("cacheRepository")
            == "exact"
        )

    def test_config_fallback_stringified(self):
        """Test config values are returned as strings."""
        reader = InputReader(environ={}, config_inputs={"version": 1.5})

        assert reader.get_input("version") == "1.5"

    def test_missing_input(self):
        """Test unknown input returns None."""
        assert InputReader(environ={}).get_input("version") is None


class TestLoadYamlConfig:
    """Tests for load_yaml_config()."""

    def test_load(self, tmp_path):
        """Test YAML mapping is loaded."""
        config_file = tmp_path / "setup-go.yaml"
        config_file.write_text('inputs:\n  version: "1.21.0"\n')

        assert load_yaml_config(config_file) == {"inputs": {"version": "1.21.0"}}

    def test_missing_optional(self, tmp_path):
        """Test optional missing file yields empty config."""
        assert load_yaml_config(tmp_path / "missing.yaml") == {}

    def test_missing_required(self, tmp_path):
        """Test required missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_yaml_config(tmp_path / "missing.yaml", required=True)

    def test_empty_file(self, tmp_path):
        """Test empty file yields empty config."""
        config_file = tmp_path / "setup-go.yaml"
        config_file.write_text("")

        assert load_yaml_config(config_file) == {}

    def test_invalid_yaml(self, tmp_path, caplog):
        """Test malformed YAML raises ValueError and leaves reporting to the caller."""
        config_file = tmp_path / "setup-go.yaml"
        config_file.write_text("inputs: [unclosed\n")

        with pytest.raises(ValueError, match="Invalid YAML"):
            load_yaml_config(config_file)

        assert not [r for r in caplog.records if r.levelname == "ERROR"]

    def test_non_mapping(self, tmp_path):
        """Test top-level list raises ValueError."""
        config_file = tmp_path / "setup-go.yaml"
        config_file.write_text("- a\n- b\n")

        with pytest.raises(ValueError, match="must be a mapping"):
            load_yaml_config(config_file)
