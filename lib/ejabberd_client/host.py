from __future__ import annotations

import re

from .errors import InvalidConfiguration

_LABEL = r"[A-Za-z0-9][A-Za-z0-9_-]*"
_BASE_URI_RE = re.compile(
    rf"(?P<scheme>https?)://(?P<domain>{_LABEL}(?:\.{_LABEL})+)(?::(?P<port>\d+))?/?",
    re.IGNORECASE,
)


def resolve_host(base_uri: str) -> str:
    """Return the lower-cased domain of ``base_uri`` (no scheme, no port).

    Only ``http(s)://label(.label)+[:port][/]`` is accepted; a bare
    single-label host such as ``localhost`` or any path suffix is rejected.
    """
    text = str(base_uri or "").strip()
    match = _BASE_URI_RE.fullmatch(text)
    if not match:
        raise InvalidConfiguration(f"Invalid baseUri: {base_uri!r}")
    return match.group("domain").lower()


def conference_service(host: str) -> str:
    return f"conference.{host}"
