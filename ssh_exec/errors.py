"""
Error taxonomy for SSH command execution.

Every failure raised by the executor is an ExecutionError carrying a
structured ``kind``. The rendered message always starts with the kind name,
so callers that classify failures by matching on the text (``Error``,
``authentication``, ``decrypt``, ``denied``) keep working.
"""
from enum import Enum


class ErrorKind(str, Enum):
    CONNECTION = 'ConnectionError'
    AUTHENTICATION = 'AuthenticationError'
    DECRYPT = 'DecryptError'
    EXECUTION = 'ExecutionError'


class ExecutionError(Exception):
    """Base class for every failure of an SSH command execution."""

    kind: ErrorKind = ErrorKind.EXECUTION

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        return f'{self.kind.value}: {self.message}'

    def to_dict(self) -> dict:
        return {'kind': self.kind.value, 'message': str(self)}


class SSHConnectionError(ExecutionError):
    """Transport could not be established (DNS, refused, unreachable, banner, host key)."""

    kind = ErrorKind.CONNECTION


class SSHTimeoutError(SSHConnectionError):
    """The connect/auth/exec sequence did not finish in time."""


class AuthenticationError(ExecutionError):
    """The remote host rejected the supplied credentials."""

    kind = ErrorKind.AUTHENTICATION


class DecryptError(ExecutionError):
    """An encrypted private key could not be decrypted locally."""

    kind = ErrorKind.DECRYPT


class CommandRejectedError(ExecutionError):
    """The command was refused before any connection was attempted."""


__all__ = [
    'AuthenticationError',
    'CommandRejectedError',
    'DecryptError',
    'ErrorKind',
    'ExecutionError',
    'SSHConnectionError',
    'SSHTimeoutError',
]
