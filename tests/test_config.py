"""
Configuration validation tests.
"""

from worklog.core import config


def test_default_config_has_no_issues(monkeypatch, tmp_path):
    monkeypatch.setattr(config, "WORKLOGS_FILE", str(tmp_path / "worklogs.json"))
    monkeypatch.setattr(config, "COMPONENTS_FILE", str(tmp_path / "components.json"))
    monkeypatch.setattr(config, "UPLOAD_URL_PREFIX", "/uploads")
    monkeypatch.setattr(config, "PORT", 5000)

    assert config.validate_config() == []


def test_same_file_for_both_collections_is_reported(monkeypatch, tmp_path):
    shared = str(tmp_path / "data.json")
    monkeypatch.setattr(config, "WORKLOGS_FILE", shared)
    monkeypatch.setattr(config, "COMPONENTS_FILE", shared)

    assert "WORKLOGS_FILE and COMPONENTS_FILE must be different files" in config.validate_config()


def test_upload_prefix_without_slash_is_reported(monkeypatch):
    monkeypatch.setattr(config, "UPLOAD_URL_PREFIX", "uploads")

    assert "UPLOAD_URL_PREFIX must start with '/': uploads" in config.validate_config()


def test_out_of_range_port_is_reported(monkeypatch):
    monkeypatch.setattr(config, "PORT", 70000)

    assert "Invalid PORT: 70000" in config.validate_config()


def test_debug_flag_read_at_call_time(monkeypatch):
    monkeypatch.setenv("DEBUG", "true")
    assert config.debug_enabled() is True

    monkeypatch.setenv("DEBUG", "false")
    assert config.debug_enabled() is False
