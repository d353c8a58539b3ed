"""Response shapes and the policies that produce them.

A client picks one :class:`Policy` at construction time; every command it
dispatches is normalized the same way:

- ``RAW``: the body text, untouched.
- ``ENVELOPE``: ``{"status": "success", "result": ...}`` or an
  :class:`ErrorReply` when the server answered ``{"status": "error", ...}``.
- ``DECODED``: the decoded JSON value, ``None`` when the body is not JSON.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from .transport import RawResult

log = logging.getLogger(__name__)

_UNDECODABLE = object()


class Policy(str, Enum):
    RAW = "raw"
    ENVELOPE = "envelope"
    DECODED = "decoded"


@dataclass(frozen=True)
class RawBody:
    body: str


@dataclass(frozen=True)
class Decoded:
    value: Any


@dataclass(frozen=True)
class ErrorReply:
    message: str
    original: Any


Response = Union[RawBody, Decoded, ErrorReply]


def _decode(body: str) -> Any:
    try:
        return json.loads(body)
    except ValueError:
        log.debug("reply is not JSON (%d chars)", len(body))
        return _UNDECODABLE


def _raw(raw: RawResult) -> Response:
    return RawBody(raw.body)


def _envelope(raw: RawResult) -> Response:
    data = _decode(raw.body)
    if isinstance(data, dict) and data.get("status") == "error":
        message = data.get("message")
        return ErrorReply("" if message is None else str(message), data)
    result = raw.body if data is _UNDECODABLE else data
    return Decoded({"status": "success", "result": result})


def _decoded(raw: RawResult) -> Response:
    data = _decode(raw.body)
    return Decoded(None if data is _UNDECODABLE else data)


_NORMALIZERS = {
    Policy.RAW: _raw,
    Policy.ENVELOPE: _envelope,
    Policy.DECODED: _decoded,
}


def normalize(policy: Policy | str, raw: RawResult) -> Response:
    return _NORMALIZERS[Policy(policy)](raw)
