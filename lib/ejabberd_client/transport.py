from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from .config_types import ClientConfig
from .errors import NetworkError, ServerError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawResult:
    status_code: int
    body: str

    @property
    def status_was_client_error(self) -> bool:
        return 400 <= self.status_code < 500


class Transport:
    def __init__(self, cfg: ClientConfig, *, transport: httpx.BaseTransport | None = None):
        self._cfg = cfg
        headers = {
            "User-Agent": "ejabberd-admin/0.1.0",
            "Authorization": cfg.authorization,
            "X-Admin": "true",
        }

        self._client = httpx.Client(
            base_url=cfg.base_uri.rstrip("/"),
            timeout=cfg.timeout_s,
            headers=headers,
            verify=cfg.verify,
            follow_redirects=True,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def post(self, path: str, payload: dict[str, Any]) -> RawResult:
        log.debug("POST %s keys=%s", path, sorted(payload))
        try:
            r = self._client.post(path, json=payload)
        except httpx.RequestError as e:
            raise NetworkError(f"POST {path} failed: {e}") from e

        # 4xx replies are data for the normalizer; only 5xx is a failure
        if r.status_code >= 500:
            raise ServerError(r.status_code, f"POST {path} failed with {r.status_code}", r.text[:1000] or None)

        if r.status_code >= 400:
            log.debug("POST %s answered %s, passing body through", path, r.status_code)
        return RawResult(status_code=r.status_code, body=r.text)
