from __future__ import annotations

from ejabberd_cli import config


def _use_tmp_config_dir(tmp_path, monkeypatch) -> None:
    def _config_dir(_: str) -> str:
        return str(tmp_path)

    monkeypatch.setattr(config, "user_config_dir", _config_dir)
    for env in (config.ENV_BASE_URI, config.ENV_AUTHORIZATION, config.ENV_VERIFY):
        monkeypatch.delenv(env, raising=False)


def test_load_config_missing_file_returns_defaults(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(tmp_path, monkeypatch)
    cfg = config.load_config()
    assert cfg.base_uri == ""
    assert cfg.verify is False
    assert cfg.policy == "envelope"


def test_save_and_load_round_trip(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(tmp_path, monkeypatch)
    cfg = config.AppConfig(base_uri="https://chat.example.com", authorization="tok", verify=True, policy="raw")

    path = config.save_config(cfg)
    contents = tmp_path.joinpath("config.toml").read_text(encoding="utf-8")

    assert path.endswith("config.toml")
    assert "catalog" not in contents
    loaded = config.load_config()
    assert loaded.base_uri == "https://chat.example.com"
    assert loaded.authorization == "tok"
    assert loaded.verify is True
    assert loaded.policy == "raw"


def test_env_overrides_file(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(tmp_path, monkeypatch)
    tmp_path.joinpath("config.toml").write_text(
        '\n'.join(['base_uri = "https://file.example.com"', 'authorization = "file-token"', ""]),
        encoding="utf-8",
    )
    monkeypatch.setenv(config.ENV_BASE_URI, "env.example.com/")
    monkeypatch.setenv(config.ENV_AUTHORIZATION, "env-token")
    monkeypatch.setenv(config.ENV_VERIFY, "yes")

    cfg = config.resolve_config()
    assert cfg.base_uri == "https://env.example.com"
    assert cfg.authorization == "env-token"
    assert cfg.verify is True
    assert config.load_config().authorization == "file-token"


def test_unknown_policy_in_file_is_ignored(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(tmp_path, monkeypatch)
    tmp_path.joinpath("config.toml").write_text('policy = "fancy"\n', encoding="utf-8")
    assert config.load_config().policy == "envelope"


def test_normalize_base_uri_defaults_to_https() -> None:
    assert config.normalize_base_uri("chat.example.com:5443") == "https://chat.example.com:5443"


def test_normalize_base_uri_defaults_to_http_for_localhost() -> None:
    assert config.normalize_base_uri("127.0.0.1:5280") == "http://127.0.0.1:5280"


def test_normalize_base_uri_strips_trailing_slash() -> None:
    assert config.normalize_base_uri("https://chat.example.com/") == "https://chat.example.com"


def test_normalize_base_uri_http_only_for_resolvable_loopback() -> None:
    assert config.normalize_base_uri("localhost.localdomain:5280") == "http://localhost.localdomain:5280"
    assert config.normalize_base_uri("localhost:5280") == "https://localhost:5280"
