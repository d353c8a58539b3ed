from __future__ import annotations

import tomllib
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any

from .errors import InvalidConfiguration, MissingParameter, UnexpectedParameter, UnknownCommand
from .host import conference_service

CATALOG_RESOURCE = "commands.toml"
PARAM_KINDS = {"string", "integer", "any"}
REPLY_KINDS = {"json", "text"}


@dataclass(frozen=True)
class Literal:
    value: Any


@dataclass(frozen=True)
class FromHost:
    template: str = "{host}"

    def render(self, host: str) -> str:
        return self.template.replace("{host}", host)


HOST = FromHost()
CONFERENCE_HOST = FromHost("conference.{host}")

Default = Literal | FromHost | None


def room_jid(value: Any, host: str) -> Any:
    """Qualify a bare room name with the host's conference service."""
    text = str(value)
    if "conference" in text:
        return value
    return f"{text}@{conference_service(host)}"


TRANSFORMS: dict[str, Callable[[Any, str], Any]] = {
    "room_jid": room_jid,
}


@dataclass(frozen=True)
class ParamSpec:
    key: str
    required: bool = True
    default: Default = None
    transform: str | None = None
    kind: str = "string"
    doc: str = ""

    def resolve_default(self, host: str) -> Any:
        if isinstance(self.default, FromHost):
            return self.default.render(host)
        if isinstance(self.default, Literal):
            return self.default.value
        return None

    def describe_default(self) -> str:
        if isinstance(self.default, FromHost):
            return self.default.template
        if isinstance(self.default, Literal):
            return repr(self.default.value)
        return "" if self.required else "null"


@dataclass(frozen=True)
class CommandDefinition:
    name: str
    path: str
    params: tuple[ParamSpec, ...] = ()
    returns: str = "json"
    doc: str = ""

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(p.key for p in self.params)


@dataclass(frozen=True)
class CommandRegistry:
    commands: Mapping[str, CommandDefinition] = field(default_factory=dict)
    version: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "commands", MappingProxyType(dict(self.commands)))

    def get(self, name: str) -> CommandDefinition:
        try:
            return self.commands[name]
        except KeyError:
            raise UnknownCommand(name) from None

    def names(self) -> list[str]:
        return sorted(self.commands)

    def merged(self, other: CommandRegistry | Mapping[str, CommandDefinition]) -> CommandRegistry:
        extra = other.commands if isinstance(other, CommandRegistry) else other
        version = other.version if isinstance(other, CommandRegistry) and other.version else self.version
        return CommandRegistry({**self.commands, **extra}, version=version)

    def __contains__(self, name: object) -> bool:
        return name in self.commands

    def __iter__(self) -> Iterator[CommandDefinition]:
        return (self.commands[n] for n in self.names())

    def __len__(self) -> int:
        return len(self.commands)


def resolve_params(definition: CommandDefinition, args: Mapping[str, Any], host: str) -> dict[str, Any]:
    """Build the request payload for one invocation.

    Caller values win (after their transform); then the declared default;
    optional params with no default go out as ``None``.
    """
    unexpected = [k for k in args if k not in definition.keys]
    if unexpected:
        raise UnexpectedParameter(definition.name, unexpected)

    payload: dict[str, Any] = {}
    for spec in definition.params:
        if args.get(spec.key) is not None:
            value = args[spec.key]
            if spec.transform:
                value = TRANSFORMS[spec.transform](value, host)
        elif spec.default is not None:
            value = spec.resolve_default(host)
        elif spec.required:
            raise MissingParameter(definition.name, spec.key)
        else:
            value = None
        payload[spec.key] = value
    return payload


# --- catalog loading ---

def _parse_param(command: str, row: Mapping[str, Any]) -> ParamSpec:
    key = str(row.get("key") or "").strip()
    if not key:
        raise InvalidConfiguration(f"{command}: param without key")
    if "default" in row and "derive" in row:
        raise InvalidConfiguration(f"{command}.{key}: 'default' and 'derive' are exclusive")

    default: Default = None
    if "default" in row:
        default = Literal(row["default"])
    elif "derive" in row:
        template = str(row["derive"])
        if "{host}" not in template:
            raise InvalidConfiguration(f"{command}.{key}: derive template must reference {{host}}")
        if "{" in template.replace("{host}", "") or "}" in template.replace("{host}", ""):
            raise InvalidConfiguration(f"{command}.{key}: derive template may only use {{host}}")
        default = FromHost(template)

    transform = row.get("transform")
    if transform is not None and transform not in TRANSFORMS:
        raise InvalidConfiguration(f"{command}.{key}: unknown transform '{transform}'")
    kind = str(row.get("kind") or "string")
    if kind not in PARAM_KINDS:
        raise InvalidConfiguration(f"{command}.{key}: unknown kind '{kind}'")

    optional = bool(row.get("optional", False))
    return ParamSpec(
        key=key,
        required=default is None and not optional,
        default=default,
        transform=transform,
        kind=kind,
        doc=str(row.get("doc") or ""),
    )


def _parse_command(row: Mapping[str, Any]) -> CommandDefinition:
    name = str(row.get("name") or "").strip()
    if not name:
        raise InvalidConfiguration("command without name")
    params = tuple(_parse_param(name, p) for p in row.get("param") or [])
    keys = [p.key for p in params]
    if len(set(keys)) != len(keys):
        raise InvalidConfiguration(f"{name}: duplicate parameter keys")
    returns = str(row.get("returns") or "json")
    if returns not in REPLY_KINDS:
        raise InvalidConfiguration(f"{name}: unknown reply kind '{returns}'")
    return CommandDefinition(
        name=name,
        path=str(row.get("path") or f"/api/{name}"),
        params=params,
        returns=returns,
        doc=str(row.get("doc") or ""),
    )


def parse_catalog(data: Mapping[str, Any]) -> CommandRegistry:
    commands: dict[str, CommandDefinition] = {}
    for row in data.get("command") or []:
        definition = _parse_command(row)
        if definition.name in commands:
            raise InvalidConfiguration(f"duplicate command '{definition.name}'")
        commands[definition.name] = definition
    return CommandRegistry(commands, version=str(data.get("version") or ""))


def load_catalog(path: str | Path | None = None) -> CommandRegistry:
    """Load a TOML command catalog; the packaged one when ``path`` is None."""
    try:
        if path is None:
            text = resources.files(__package__).joinpath(CATALOG_RESOURCE).read_text(encoding="utf-8")
        else:
            text = Path(path).read_text(encoding="utf-8")
        data = tomllib.loads(text)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise InvalidConfiguration(f"cannot load command catalog: {e}") from e
    return parse_catalog(data)
