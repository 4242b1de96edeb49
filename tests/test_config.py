from pathlib import Path

from remote_graphql_check import config


def test_defaults_when_missing(tmp_path: Path) -> None:
    cfg = config.load(str(tmp_path / "missing.yaml"))

    assert cfg.default_url is None
    assert cfg.timeout == 5.0
    assert cfg.token is None


def test_load_yaml(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("default_url: https://remote.example.com/graphql\ntimeout: 2\n")

    cfg = config.load(str(path))

    assert cfg.default_url == "https://remote.example.com/graphql"
    assert cfg.timeout == 2.0
    assert cfg.token is None


def test_example_config_loads_back(tmp_path: Path) -> None:
    path = config.create_example_config(str(tmp_path / "nested" / "config.yaml"))

    cfg = config.load(path)

    assert cfg.default_url == "https://remote.example.com/graphql"
    assert cfg.timeout == 5.0
