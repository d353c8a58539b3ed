from __future__ import annotations
from dataclasses import dataclass

from .responses import Policy


@dataclass(frozen=True)
class ClientConfig:
    base_uri: str
    authorization: str = ""
    verify: bool = False
    timeout_s: float = 15.0
    policy: Policy = Policy.ENVELOPE
