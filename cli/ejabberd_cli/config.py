from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from typing import Any

import tomli_w
from platformdirs import user_config_dir

from ejabberd_client import Policy

from . import console

APP_NAME = "ejabberd-admin"
CONFIG_FILENAME = "config.toml"
ENV_BASE_URI = "EJABBERD_BASE_URI"
ENV_AUTHORIZATION = "EJABBERD_AUTHORIZATION"
ENV_VERIFY = "EJABBERD_VERIFY"

_WARNED_BASE_URI_SCHEME = False


@dataclass
class AppConfig:
    base_uri: str
    authorization: str = ""
    verify: bool = False
    timeout_s: float = 15.0
    policy: str = Policy.ENVELOPE.value
    catalog: str | None = None


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_config() -> AppConfig:
    return AppConfig(base_uri="")


def normalize_base_uri(raw: str | None, *, warn: bool = False) -> str:
    value = (raw or "").strip()
    if not value:
        return ""
    value = value.rstrip("/")
    lowered = value.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return value

    # bare "localhost" is rejected by resolve_host
    host = value.split("/", 1)[0].split(":", 1)[0].lower()
    scheme = "http://" if host == "127.0.0.1" or host.startswith("localhost.") else "https://"

    normalized = f"{scheme}{value}"
    if warn:
        _warn_missing_scheme(normalized)
    return normalized


def _warn_missing_scheme(normalized: str) -> None:
    global _WARNED_BASE_URI_SCHEME
    if _WARNED_BASE_URI_SCHEME:
        return
    if not _is_interactive():
        return
    console.warn(f"base_uri missing scheme, assuming {normalized}")
    _WARNED_BASE_URI_SCHEME = True


def _is_interactive() -> bool:
    import sys
    return bool(sys.stderr.isatty() or sys.stdout.isatty())


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    data: dict[str, Any] = {
        "base_uri": cfg.base_uri,
        "authorization": cfg.authorization,
        "verify": cfg.verify,
        "timeout_s": cfg.timeout_s,
        "policy": cfg.policy,
        "catalog": cfg.catalog,
    }
    return {k: v for k, v in data.items() if v is not None}


def from_toml(data: dict[str, Any]) -> AppConfig:
    cfg = default_config()
    base_uri = normalize_base_uri(str(data.get("base_uri") or ""), warn=True)
    if base_uri:
        cfg.base_uri = base_uri
    cfg.authorization = str(data.get("authorization") or "")
    cfg.verify = _parse_bool(data.get("verify", False))
    try:
        cfg.timeout_s = float(data.get("timeout_s", cfg.timeout_s))
    except (TypeError, ValueError):
        console.warn(f"ignoring invalid timeout_s={data.get('timeout_s')!r}")
    policy = str(data.get("policy") or cfg.policy).strip().lower()
    if policy in {p.value for p in Policy}:
        cfg.policy = policy
    else:
        console.warn(f"ignoring unknown policy={policy!r}")
    catalog = data.get("catalog")
    cfg.catalog = str(catalog) if catalog else None
    return cfg


def apply_env(cfg: AppConfig) -> AppConfig:
    base_uri = os.getenv(ENV_BASE_URI, "").strip()
    if base_uri:
        cfg.base_uri = normalize_base_uri(base_uri)
    authorization = os.getenv(ENV_AUTHORIZATION)
    if authorization:
        cfg.authorization = authorization
    verify = os.getenv(ENV_VERIFY)
    if verify is not None and verify.strip():
        cfg.verify = _parse_bool(verify)
    return cfg


def load_config() -> AppConfig:
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return from_toml(data)
    except FileNotFoundError:
        return default_config()


def resolve_config() -> AppConfig:
    """File settings with env overrides applied; never saved back."""
    return apply_env(load_config())


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    ensure_parent_dir(path)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(to_toml(cfg)).encode("utf-8"))
    os.chmod(path, 0o600)
    return path
