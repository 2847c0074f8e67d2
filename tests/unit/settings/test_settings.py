import pytest
import yaml

from filterflow.exceptions import SettingsError
from filterflow.settings import FilterFlowSettings


def write_settings(path, data):
    path.write_text(yaml.dump(data))
    return path


def test_settings_load_successful_load(tmp_path):
    """Load from YAML and resolve relative paths against the file's directory."""
    settings_file = write_settings(
        tmp_path / "filterflow.yaml",
        {"local_filters": ["filters", "/abs/filters"], "log_level": "debug", "log_dir": "logs"},
    )

    settings = FilterFlowSettings.load(str(settings_file))

    assert settings.local_filters == [str(tmp_path / "filters"), "/abs/filters"]
    assert settings.log_level == "DEBUG"
    assert settings.log_dir == str(tmp_path / "logs")
    assert settings.settings_file == str(settings_file.resolve())
    assert settings.base_dir == settings_file.resolve().parent


def test_settings_load_file_not_found():
    """Test error when an explicitly requested settings file doesn't exist."""
    with pytest.raises(SettingsError, match="Settings file not found"):
        FilterFlowSettings.load("nonexistent.yaml")


def test_settings_load_env_file_not_found(monkeypatch):
    """Test the FILTERFLOW_SETTINGS variable counts as an explicit request."""
    monkeypatch.setenv("FILTERFLOW_SETTINGS", "missing_from_env.yaml")

    with pytest.raises(SettingsError, match="Settings file not found"):
        FilterFlowSettings.load()


def test_settings_load_env_file(tmp_path, monkeypatch):
    settings_file = write_settings(tmp_path / "custom.yaml", {"allow_filter_override": True})
    monkeypatch.setenv("FILTERFLOW_SETTINGS", str(settings_file))

    settings = FilterFlowSettings.load()

    assert settings.allow_filter_override is True


def test_settings_load_defaults_without_file(tmp_path, monkeypatch):
    """Test defaults are used when the default settings file is absent."""
    monkeypatch.chdir(tmp_path)

    settings = FilterFlowSettings.load()

    assert settings.local_filters == [str(tmp_path / "filters")]
    assert settings.allow_filter_override is False
    assert settings.log_level == "INFO"
    assert settings.log_dir is None
    assert settings.settings_file is None


def test_settings_load_default_file(tmp_path, monkeypatch):
    write_settings(tmp_path / "filterflow.yaml", {"local_filters": "my_filters"})
    monkeypatch.chdir(tmp_path)

    settings = FilterFlowSettings.load()

    assert settings.local_filters == [str(tmp_path / "my_filters")]


def test_settings_load_invalid_yaml(tmp_path):
    """Test error when YAML file is invalid."""
    settings_file = tmp_path / "bad_settings.yaml"
    settings_file.write_text("invalid: yaml: content:")

    with pytest.raises(SettingsError, match="Failed to load settings"):
        FilterFlowSettings.load(str(settings_file))


def test_settings_load_non_dict_yaml(tmp_path):
    settings_file = tmp_path / "list.yaml"
    settings_file.write_text("- a\n- b\n")

    with pytest.raises(SettingsError, match="must contain a YAML dictionary"):
        FilterFlowSettings.load(str(settings_file))


def test_settings_unknown_key(tmp_path):
    settings_file = write_settings(tmp_path / "extra.yaml", {"unknown_option": 1})

    with pytest.raises(SettingsError, match="Invalid settings"):
        FilterFlowSettings.load(str(settings_file))


def test_settings_invalid_log_level(tmp_path):
    settings_file = write_settings(tmp_path / "level.yaml", {"log_level": "LOUD"})

    with pytest.raises(SettingsError, match="Invalid log level"):
        FilterFlowSettings.load(str(settings_file))


def test_settings_overrides_win_over_file(tmp_path):
    settings_file = write_settings(tmp_path / "filterflow.yaml", {"log_level": "INFO"})

    settings = FilterFlowSettings.load(str(settings_file), log_level="ERROR")

    assert settings.log_level == "ERROR"


def test_settings_env_variable_fills_unset_field(tmp_path, monkeypatch):
    """Test FILTERFLOW_SETTINGS_* variables apply to fields the file leaves unset."""
    settings_file = write_settings(tmp_path / "filterflow.yaml", {"allow_filter_override": False})
    monkeypatch.setenv("FILTERFLOW_SETTINGS_LOG_LEVEL", "WARNING")

    settings = FilterFlowSettings.load(str(settings_file))

    assert settings.log_level == "WARNING"


def test_settings_explicit_base_dir(tmp_path):
    settings_file = write_settings(tmp_path / "filterflow.yaml", {"local_filters": ["filters"]})
    base_dir = tmp_path / "elsewhere"

    settings = FilterFlowSettings.load(str(settings_file), base_dir=base_dir)

    assert settings.local_filters == [str(base_dir / "filters")]


def test_settings_as_dict(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    data = FilterFlowSettings.load().as_dict

    assert set(data) == {"local_filters", "allow_filter_override", "log_level", "log_dir"}
