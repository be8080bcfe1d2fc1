"""Tests for diagnostic configuration loading."""

from pathlib import Path

import yaml

from capability_diagnostic.config import (
    DiagnosticConfig,
    find_config_file,
    get_config,
    load_config,
    reset_config,
    save_default_config,
)


class TestDefaults:
    """Tests for the default thresholds."""

    def test_default_thresholds(self):
        """Defaults match the published framework thresholds."""
        cfg = get_config()
        assert cfg.band_thresholds.developing == 1.25
        assert cfg.band_thresholds.established == 2.5
        assert cfg.band_thresholds.leading == 3.5
        assert cfg.rule_thresholds.low_floor_max == 1
        assert cfg.rule_thresholds.imbalance_watch_spread == 2
        assert cfg.rule_thresholds.imbalance_concern_spread == 3
        assert cfg.rule_thresholds.coverage_watch_spread == 25
        assert cfg.rule_thresholds.coverage_concern_spread == 40
        assert cfg.stabiliser_thresholds.average_min == 2.5

    def test_get_config_is_cached(self):
        """The same instance is returned until reset."""
        assert get_config() is get_config()


class TestLoading:
    """Tests for YAML load/save."""

    def test_load_partial_yaml(self, tmp_path):
        """Unspecified settings keep their defaults."""
        path = tmp_path / "diagnostic-config.yaml"
        path.write_text(yaml.dump({"rule_thresholds": {"coverage_watch_spread": 30}}), encoding="utf-8")

        cfg = load_config(path)

        assert cfg.rule_thresholds.coverage_watch_spread == 30
        assert cfg.rule_thresholds.coverage_concern_spread == 40
        assert get_config() is cfg

    def test_load_empty_yaml(self, tmp_path):
        """An empty file gives the defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == DiagnosticConfig()

    def test_reset(self, tmp_path):
        """reset_config restores defaults."""
        path = tmp_path / "c.yaml"
        path.write_text("band_thresholds:\n  leading: 3.9\n", encoding="utf-8")
        load_config(path)
        reset_config()
        assert get_config().band_thresholds.leading == 3.5

    def test_save_default_round_trip(self, tmp_path):
        """The saved default file loads back to the defaults."""
        path = tmp_path / "nested" / "diagnostic-config.yaml"
        save_default_config(path)

        assert path.read_text(encoding="utf-8").startswith("# Capability Diagnostic Configuration")
        assert load_config(path) == DiagnosticConfig()


class TestFindConfigFile:
    """Tests for config file discovery."""

    def test_env_var_takes_priority(self, tmp_path, monkeypatch):
        """CAPABILITY_DIAGNOSTIC_CONFIG is checked first."""
        path = tmp_path / "custom.yaml"
        path.write_text("{}", encoding="utf-8")
        monkeypatch.setenv("CAPABILITY_DIAGNOSTIC_CONFIG", str(path))
        assert find_config_file() == path

    def test_current_directory(self, tmp_path, monkeypatch):
        """./diagnostic-config.yaml is found."""
        monkeypatch.delenv("CAPABILITY_DIAGNOSTIC_CONFIG", raising=False)
        monkeypatch.chdir(tmp_path)
        (tmp_path / "diagnostic-config.yaml").write_text("{}", encoding="utf-8")
        assert find_config_file() == Path("diagnostic-config.yaml")

    def test_none_found(self, tmp_path, monkeypatch):
        """No file anywhere returns None."""
        monkeypatch.delenv("CAPABILITY_DIAGNOSTIC_CONFIG", raising=False)
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert find_config_file() is None

    def test_yml_extension_found(self, tmp_path, monkeypatch):
        """./diagnostic-config.yml is found when no .yaml file exists."""
        monkeypatch.delenv("CAPABILITY_DIAGNOSTIC_CONFIG", raising=False)
        monkeypatch.chdir(tmp_path)
        (tmp_path / "diagnostic-config.yml").write_text("{}", encoding="utf-8")
        assert find_config_file() == Path("diagnostic-config.yml")

    def test_missing_env_path_falls_through(self, tmp_path, monkeypatch):
        """A missing file named by the env var does not hide the local file."""
        monkeypatch.setenv("CAPABILITY_DIAGNOSTIC_CONFIG", str(tmp_path / "absent.yaml"))
        monkeypatch.chdir(tmp_path)
        (tmp_path / "diagnostic-config.yaml").write_text("{}", encoding="utf-8")
        assert find_config_file() == Path("diagnostic-config.yaml")

    def test_saved_header_names_env_var(self, tmp_path):
        """The template header lists the env var search location."""
        path = tmp_path / "diagnostic-config.yaml"
        save_default_config(path)
        assert "CAPABILITY_DIAGNOSTIC_CONFIG" in path.read_text(encoding="utf-8")
