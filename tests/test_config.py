from passlab.config import DEFAULTS, config_path, load_config, save_config


def test_defaults_when_missing(isolated_config):
    assert config_path() == str(isolated_config)
    assert load_config() == DEFAULTS


def test_file_values_override_defaults(isolated_config):
    isolated_config.write_text('{"use_wordlist": true}', encoding="utf-8")
    cfg = load_config()
    assert cfg["use_wordlist"] is True
    assert cfg["log_level"] == DEFAULTS["log_level"]


def test_broken_file_falls_back(isolated_config):
    isolated_config.write_text("{not json", encoding="utf-8")
    assert load_config() == DEFAULTS
    isolated_config.write_text("[1, 2]", encoding="utf-8")
    assert load_config() == DEFAULTS


def test_save_then_load(tmp_path, monkeypatch):
    path = tmp_path / "nested" / "config.json"
    monkeypatch.setenv("PASSLAB_CONFIG", str(path))
    cfg = load_config()
    cfg["default_scenario"] = "online"
    save_config(cfg)
    assert load_config()["default_scenario"] == "online"
