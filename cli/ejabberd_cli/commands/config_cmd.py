from __future__ import annotations

import typer

from ejabberd_client import InvalidConfiguration, Policy
from ejabberd_client.host import resolve_host

from .. import console
from ..config import config_path, load_config, normalize_base_uri, resolve_config, save_config

app = typer.Typer(help="Manage local settings (~/.config/ejabberd-admin/config.toml).")


@app.command("show")
def show_config():
    cfg = resolve_config()
    token_state = "(set)" if cfg.authorization.strip() else "(empty)"
    console.console.print(
        f"base_uri={cfg.base_uri or '-'} authorization={token_state} verify={str(cfg.verify).lower()} "
        f"timeout_s={cfg.timeout_s} policy={cfg.policy} catalog={cfg.catalog or '-'}"
    )
    console.console.print(f"path={config_path()}")


@app.command("set")
def set_config(
        base_uri: str | None = typer.Option(None, "--base-uri", help="Admin API base URI like https://chat.example.com:5443"),
        authorization: str | None = typer.Option(None, "--authorization", help="Value of the Authorization header."),
        verify: bool | None = typer.Option(None, "--verify/--no-verify", help="Verify TLS certificates."),
        timeout: float | None = typer.Option(None, "--timeout", min=0.1, help="Request timeout in seconds."),
        policy: Policy | None = typer.Option(None, "--policy", help="Default reply shaping."),
        catalog: str | None = typer.Option(None, "--catalog", help="Extra command catalog (TOML); '' to clear."),
):
    cfg = load_config()

    if base_uri is not None:
        normalized = normalize_base_uri(base_uri, warn=True)
        try:
            resolve_host(normalized)
        except InvalidConfiguration as e:
            console.err(str(e))
            console.info("The host needs at least two labels (chat.example.com, localhost.localdomain).")
            raise typer.Exit(code=2)
        cfg.base_uri = normalized
    if authorization is not None:
        cfg.authorization = authorization
    if verify is not None:
        cfg.verify = verify
    if timeout is not None:
        cfg.timeout_s = timeout
    if policy is not None:
        cfg.policy = policy.value
    if catalog is not None:
        cfg.catalog = catalog or None

    saved = save_config(cfg)
    console.ok(f"Config updated: {saved}")
