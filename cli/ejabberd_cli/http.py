from __future__ import annotations

from ejabberd_client import EjabberdClient, Policy
from ejabberd_client.config_types import ClientConfig
from ejabberd_client.registry import CommandRegistry, load_catalog

from .config import AppConfig, normalize_base_uri


def load_registry(cfg: AppConfig, catalog_override: str | None = None) -> CommandRegistry:
    """Packaged catalog, extended by the configured (or overriding) catalog file."""
    registry = load_catalog()
    extra = catalog_override or cfg.catalog
    if extra:
        registry = registry.merged(load_catalog(extra))
    return registry


def make_client(
    cfg: AppConfig,
    *,
    base_uri_override: str | None = None,
    policy_override: str | None = None,
    catalog_override: str | None = None,
) -> EjabberdClient:
    base_uri = normalize_base_uri(base_uri_override or cfg.base_uri, warn=True)
    return EjabberdClient(
        ClientConfig(
            base_uri=base_uri,
            authorization=cfg.authorization,
            verify=cfg.verify,
            timeout_s=cfg.timeout_s,
            policy=Policy(policy_override or cfg.policy),
        ),
        registry=load_registry(cfg, catalog_override),
    )
