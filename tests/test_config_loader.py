"""Tests for ConfigLoader and configuration models."""

import pytest
import yaml

from dddcheck.domain.exceptions import ConfigurationError
from dddcheck.infrastructure.config.config_loader import ConfigLoader
from dddcheck.infrastructure.config.config_models import DddCheckConfig


class TestDefaults:
    """Built-in configuration."""

    def test_default_values(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = ConfigLoader.load()

        assert config.scan.source_extension == ".go"
        assert config.scan.test_suffix == "_test.go"
        assert config.scan.constructor_prefix == "New"
        assert config.scan.excluded_dirs == [".git", "vendor", "node_modules"]
        assert config.scan.max_workers == 4
        assert config.scan.project_marker == "go.mod"
        assert config.markers == []
        assert config.output.default_format == "console"
        assert config.logging.level == "WARNING"
        assert config.logging.file is None


class TestLoading:
    """Loading from files and the environment."""

    def test_project_file_is_picked_up(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "dddcheck.yaml").write_text("scan:\n  constructor_prefix: Make\n")

        assert ConfigLoader.load().scan.constructor_prefix == "Make"

    def test_explicit_file_overrides_project_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "dddcheck.yaml").write_text("scan:\n  max_workers: 2\n")
        explicit = tmp_path / "ci.yaml"
        explicit.write_text("scan:\n  max_workers: 8\noutput:\n  default_format: JSON\n")

        config = ConfigLoader.load(str(explicit))

        assert config.scan.max_workers == 8
        assert config.output.default_format == "json"

    def test_markers_section(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "markers.yaml"
        path.write_text(yaml.safe_dump({
            "markers": [
                {"kind": "Domain-Event", "package_path": "example.com/ddd/event", "type_name": "Event"},
            ]
        }))

        definitions = ConfigLoader.load(str(path)).marker_definitions()

        assert len(definitions) == 1
        assert definitions[0].kind == "domain_event"
        assert definitions[0].field_name == "_"

    def test_environment_overrides(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("DDDCHECK_SCAN_MAX_WORKERS", "12")
        monkeypatch.setenv("DDDCHECK_SCAN_EXCLUDED_DIRS", "vendor, testdata")
        monkeypatch.setenv("DDDCHECK_OUTPUT_COLOR", "no")
        monkeypatch.setenv("DDDCHECK_LOGGING_LEVEL", "debug")

        config = ConfigLoader.load()

        assert config.scan.max_workers == 12
        assert config.scan.excluded_dirs == ["vendor", "testdata"]
        assert config.output.color is False
        assert config.logging.level == "DEBUG"

    def test_single_value_for_list_field(self, tmp_path, monkeypatch):
        """A list field set from the environment without commas is a one-element list."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("DDDCHECK_SCAN_EXCLUDED_DIRS", "vendor")

        assert ConfigLoader.load().scan.excluded_dirs == ["vendor"]

    def test_string_fields_stay_strings(self, tmp_path, monkeypatch):
        """Numeric-looking or comma-holding values for string fields are not converted."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("DDDCHECK_LOGGING_FILE", "2024")
        monkeypatch.setenv("DDDCHECK_SCAN_CONSTRUCTOR_PREFIX", "New,Make")
        monkeypatch.setenv("DDDCHECK_SCAN_PROJECT_MARKER", "yes")

        config = ConfigLoader.load()

        assert config.logging.file == "2024"
        assert config.scan.constructor_prefix == "New,Make"
        assert config.scan.project_marker == "yes"

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigLoader.load(str(tmp_path / "absent.yaml"))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("scan: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            ConfigLoader.load(str(path))

    def test_non_mapping_yaml(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            ConfigLoader.load(str(path))

    @pytest.mark.parametrize("content", [
        "scan:\n  max_workers: 0\n",
        "scan:\n  source_extension: go\n",
        "output:\n  default_format: html\n",
        "unknown_section: {}\n",
    ])
    def test_invalid_values(self, tmp_path, content):
        path = tmp_path / "invalid.yaml"
        path.write_text(content)

        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            ConfigLoader.load(str(path))


class TestDefaultConfigFile:
    """Creating and inspecting configuration files."""

    def test_created_file_round_trips(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = ConfigLoader.create_default_config(str(tmp_path / "conf" / "dddcheck.yaml"))

        assert path.exists()
        assert path.read_text().startswith("# dddcheck configuration")
        assert ConfigLoader.load(str(path)) == DddCheckConfig()

    def test_config_info(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".dddcheck.yaml").write_text("{}\n")
        monkeypatch.setenv("DDDCHECK_SCAN_MAX_WORKERS", "3")

        info = ConfigLoader.get_config_info()

        assert ".dddcheck.yaml" in info["existing_configs"][0]
        assert info["env_overrides"] == ["DDDCHECK_SCAN_MAX_WORKERS"]
