from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from .config_types import ClientConfig
from .host import resolve_host
from .registry import CommandDefinition, CommandRegistry, load_catalog, resolve_params
from .responses import Policy, Response, normalize
from .transport import Transport

log = logging.getLogger(__name__)


class EjabberdClient:
    """Generic dispatcher over ejabberd's ``/api/<command>`` endpoints.

    Every admin command is a row in the command catalog; ``dispatch`` looks
    the row up, fills host-derived defaults, posts the payload and shapes the
    reply according to ``cfg.policy``::

        with EjabberdClient(ClientConfig("https://chat.example.com", "tok")) as c:
            c.dispatch("register", user="alice", password="pw")
    """

    def __init__(
            self,
            cfg: ClientConfig,
            *,
            registry: CommandRegistry | None = None,
            transport: httpx.BaseTransport | None = None,
    ):
        self.host = resolve_host(cfg.base_uri)
        self.policy = Policy(cfg.policy)
        self.registry = registry if registry is not None else load_catalog()
        self._t = Transport(cfg, transport=transport)

    def close(self) -> None:
        self._t.close()

    def __enter__(self) -> EjabberdClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def command(self, name: str) -> CommandDefinition:
        return self.registry.get(name)

    def build_payload(self, name: str, args: Mapping[str, Any] | None = None, **params: Any) -> dict[str, Any]:
        """Resolve a command's payload without sending it."""
        definition = self.registry.get(name)
        return resolve_params(definition, {**(args or {}), **params}, self.host)

    def dispatch(self, name: str, args: Mapping[str, Any] | None = None, **params: Any) -> Response:
        definition = self.registry.get(name)
        payload = resolve_params(definition, {**(args or {}), **params}, self.host)
        log.debug("dispatch %s -> %s", name, definition.path)
        raw = self._t.post(definition.path, payload)
        return normalize(self.policy, raw)
