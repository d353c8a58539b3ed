from .client import EjabberdClient
from .config_types import ClientConfig
from .errors import (
    EjabberdClientError,
    InvalidConfiguration,
    MissingParameter,
    NetworkError,
    RemoteTransportFailure,
    ServerError,
    UnexpectedParameter,
    UnknownCommand,
)
from .responses import Decoded, ErrorReply, Policy, RawBody, Response

__all__ = [
    "EjabberdClient",
    "ClientConfig",
    "Policy",
    "Response",
    "RawBody",
    "Decoded",
    "ErrorReply",
    "EjabberdClientError",
    "InvalidConfiguration",
    "UnknownCommand",
    "MissingParameter",
    "UnexpectedParameter",
    "RemoteTransportFailure",
    "NetworkError",
    "ServerError",
]
