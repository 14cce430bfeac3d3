"""Tests for configuration loading."""

import pytest

from chia_exporter.config.loader import ConfigError, ConfigLoader
from chia_exporter.main import build_parser


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("CHIA_EXPORTER_CONFIG", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)


def parse(*argv):
    return build_parser().parse_args(list(argv))


def write_config(tmp_path, text):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(text)
    return str(config_file)


def test_defaults_without_file():
    config = ConfigLoader.load(parse())

    assert config.listen == ":9133"
    assert all(endpoint.enabled for endpoint in config.endpoints)


def test_single_and_double_dash_flags():
    config = ConfigLoader.load(parse(
        "-listen", "127.0.0.1:9200",
        "--wallet", "disabled",
        "-timeout", "2s",
    ))

    assert config.listen_address == ("127.0.0.1", 9200)
    assert not config.wallet.enabled
    assert config.timeout == 2.0


def test_url_alias_sets_full_node():
    config = ConfigLoader.load(parse("-url", "https://node.lan:8555"))

    assert config.full_node.base_url == "https://node.lan:8555"


def test_log_level_case_insensitive():
    assert parse("--log-level", "debug").log_level == "DEBUG"


def test_yaml_file(tmp_path, monkeypatch):
    monkeypatch.setenv("FARM_HOST", "farm.lan")
    path = write_config(tmp_path, """
listen: "0.0.0.0:9300"
timeout: 10s
farmer: "https://${FARM_HOST}:8559"
harvester: disabled
""")

    config = ConfigLoader.load(parse("--config", path))

    assert config.listen == "0.0.0.0:9300"
    assert config.timeout == 10.0
    assert config.farmer.base_url == "https://farm.lan:8559"
    assert not config.harvester.enabled


def test_flags_override_file(tmp_path):
    path = write_config(tmp_path, "listen: ':9300'\nwallet: disabled\n")

    config = ConfigLoader.load(parse("--config", path, "--listen", ":9400"))

    assert config.listen == ":9400"
    assert not config.wallet.enabled


def test_config_path_from_env(tmp_path, monkeypatch):
    path = write_config(tmp_path, "listen: ':9500'\n")
    monkeypatch.setenv("CHIA_EXPORTER_CONFIG", path)

    config = ConfigLoader.load(parse())

    assert config.listen == ":9500"


def test_file_url_alias(tmp_path):
    path = write_config(tmp_path, "url: https://node.lan:8555\n")

    assert ConfigLoader.load_from_file(path) == {"full_node": "https://node.lan:8555"}


def test_unknown_keys_ignored(tmp_path):
    path = write_config(tmp_path, "listen: ':9133'\nextra: value\n")

    assert ConfigLoader.load_from_file(path) == {"listen": ":9133"}


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        ConfigLoader.load_from_file(str(tmp_path / "nope.yaml"))


def test_invalid_yaml(tmp_path):
    path = write_config(tmp_path, "listen: [unclosed\n")

    with pytest.raises(ConfigError, match="Failed to parse"):
        ConfigLoader.load_from_file(path)


def test_non_mapping_yaml(tmp_path):
    path = write_config(tmp_path, "- a\n- b\n")

    with pytest.raises(ConfigError, match="mapping"):
        ConfigLoader.load_from_file(path)


def test_http_endpoint_is_config_error():
    with pytest.raises(ConfigError, match="endpoint SSL is mandatory"):
        ConfigLoader.load(parse("--farmer", "http://localhost:8559"))


def test_invalid_timeout_is_config_error():
    with pytest.raises(ConfigError, match="timeout"):
        ConfigLoader.load(parse("--timeout", "soon"))


def test_substitute_env_vars_nested(monkeypatch):
    monkeypatch.setenv("A", "x")
    monkeypatch.delenv("MISSING", raising=False)

    result = ConfigLoader._substitute_env_vars({"k": ["${A}", {"n": "${MISSING}-y"}], "i": 3})

    assert result == {"k": ["x", {"n": "-y"}], "i": 3}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
