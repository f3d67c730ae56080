import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    # keep tests away from the real ~/.passlab/config.json
    path = tmp_path / "config.json"
    monkeypatch.setenv("PASSLAB_CONFIG", str(path))
    return path
