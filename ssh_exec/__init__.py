"""
Run a single command on a remote host over SSH.
"""
__version__ = '0.1.0'

from ssh_exec.errors import (
    AuthenticationError,
    CommandRejectedError,
    DecryptError,
    ErrorKind,
    ExecutionError,
    SSHConnectionError,
    SSHTimeoutError,
)
from ssh_exec.models import ExecResult, SSHConfig, TextContent
from ssh_exec.utilities.ssh_command import exec_ssh_command, run_ssh_command

__all__ = [
    'AuthenticationError',
    'CommandRejectedError',
    'DecryptError',
    'ErrorKind',
    'ExecResult',
    'ExecutionError',
    'SSHConfig',
    'SSHConnectionError',
    'SSHTimeoutError',
    'TextContent',
    'exec_ssh_command',
    'run_ssh_command',
]
