from __future__ import annotations


class EjabberdClientError(Exception):
    """Base client error."""


class InvalidConfiguration(EjabberdClientError, ValueError):
    """Bad base URI or malformed command catalog."""


class UsageError(EjabberdClientError):
    def __init__(self, command: str, message: str):
        super().__init__(message)
        self.command = command


class UnknownCommand(UsageError, LookupError):
    def __init__(self, command: str):
        super().__init__(command, f"unknown command '{command}'")


class MissingParameter(UsageError):
    def __init__(self, command: str, key: str):
        super().__init__(command, f"{command}: missing required parameter '{key}'")
        self.key = key


class UnexpectedParameter(UsageError):
    def __init__(self, command: str, keys: list[str]):
        joined = ", ".join(sorted(keys))
        super().__init__(command, f"{command}: unexpected parameter(s) {joined}")
        self.keys = sorted(keys)


class RemoteTransportFailure(EjabberdClientError):
    """The request did not produce a usable reply."""


class NetworkError(RemoteTransportFailure):
    """Transport/network layer error."""


class ServerError(RemoteTransportFailure):
    def __init__(self, status_code: int, message: str, details: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details
