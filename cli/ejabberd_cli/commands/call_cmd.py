from __future__ import annotations

import json
from typing import Any

import typer

from ejabberd_client import (
    Decoded,
    EjabberdClientError,
    ErrorReply,
    InvalidConfiguration,
    Policy,
    RawBody,
    RemoteTransportFailure,
    UnknownCommand,
)
from ejabberd_client.registry import CommandDefinition

from .. import console
from ..config import resolve_config
from ..http import make_client


def _coerce(kind: str, key: str, text: str) -> Any:
    if kind == "integer":
        try:
            return int(text)
        except ValueError:
            console.err(f"{key} expects an integer, got {text!r}")
            raise typer.Exit(code=2)
    if kind == "any":
        try:
            return json.loads(text)
        except ValueError:
            return text
    return text


def parse_assignments(definition: CommandDefinition, items: list[str]) -> dict[str, Any]:
    kinds = {p.key: p.kind for p in definition.params}
    args: dict[str, Any] = {}
    for item in items:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            console.err(f"Expected key=value, got {item!r}")
            raise typer.Exit(code=2)
        args[key] = _coerce(kinds.get(key, "string"), key, value)
    return args


def _render(response, *, json_out: bool) -> None:
    if isinstance(response, RawBody):
        console.console.print(response.body, markup=False, highlight=False)
        return
    if isinstance(response, ErrorReply):
        console.err(response.message or "server returned an error")
        if json_out:
            console.print_json(response.original)
        raise typer.Exit(code=1)
    if isinstance(response, Decoded):
        value = response.value
        if json_out or isinstance(value, (dict, list)):
            console.print_json(value)
        else:
            console.console.print(str(value), markup=False, highlight=False)


def call_command(
        name: str = typer.Argument(..., help="Command name, e.g. register."),
        assignments: list[str] = typer.Argument(None, help="Parameters as key=value."),
        policy: Policy | None = typer.Option(None, "--policy", help="Reply shaping: raw, envelope or decoded."),
        dry_run: bool = typer.Option(False, "--dry-run", help="Print the resolved payload and exit."),
        json_out: bool = typer.Option(False, "--json", help="Always print JSON."),
        base_uri: str | None = typer.Option(None, "--base-uri", help="Override base URI."),
        catalog: str | None = typer.Option(None, "--catalog", help="Extra command catalog (TOML)."),
):
    cfg = resolve_config()
    if not (base_uri or cfg.base_uri):
        console.err("Base URI is not configured. Run: ejabberd-admin config set --base-uri URI")
        raise typer.Exit(code=2)

    try:
        client = make_client(
            cfg,
            base_uri_override=base_uri,
            policy_override=policy.value if policy else None,
            catalog_override=catalog,
        )
    except InvalidConfiguration as e:
        console.err(str(e))
        raise typer.Exit(code=2)

    try:
        definition = client.command(name)
        args = parse_assignments(definition, assignments or [])
        if dry_run:
            payload = client.build_payload(name, args)
            console.info(f"POST {definition.path}")
            console.print_json(payload)
            return
        response = client.dispatch(name, args)
    except UnknownCommand as e:
        console.err(f"{e}. See: ejabberd-admin commands")
        raise typer.Exit(code=2)
    except RemoteTransportFailure as e:
        console.err(f"Request failed: {e}")
        raise typer.Exit(code=2)
    except EjabberdClientError as e:
        console.err(str(e))
        raise typer.Exit(code=2)
    finally:
        client.close()

    _render(response, json_out=json_out)
