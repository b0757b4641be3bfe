'''
Single-command SSH execution.

connect -> authenticate -> exec -> collect -> close, once per call. The
blocking paramiko work runs in a worker thread so callers can await it, and
the whole sequence is bounded by one timeout. The connection is closed on
every exit path, including timeout and cancellation.
'''
import asyncio
import logging
import socket
import time

import paramiko

from ssh_exec.config import DEFAULT_TIMEOUT
from ssh_exec.errors import CommandRejectedError, ExecutionError, SSHTimeoutError
from ssh_exec.models import ExecResult, SSHConfig
from ssh_exec.utilities.ssh_connection import SSHConnection

LOGGER = logging.getLogger(__name__)

READ_SIZE = 32768
POLL_INTERVAL = 0.02


def sanitize_command(command: str, max_chars: int | None = None) -> str:
    """Validate a command before connecting. The text is returned unchanged.

    max_chars of None or <= 0 means no length limit.
    """
    if not isinstance(command, str):
        raise CommandRejectedError(f'command must be a string, got {type(command).__name__}')
    if not command.strip():
        raise CommandRejectedError('command must not be empty')
    if max_chars is not None and max_chars > 0 and len(command) > max_chars:
        raise CommandRejectedError(f'command is {len(command)} characters long, the limit is {max_chars}')
    return command


def _drain(channel: paramiko.Channel, timeout: float) -> tuple[bytes, bytes]:
    """Read stdout and stderr side by side until the remote end sends EOF.

    paramiko only reopens the channel window as data is consumed, so reading
    one stream to the end before touching the other can stall the remote
    command. Raises socket.timeout if neither stream yields data for timeout
    seconds.
    """
    stdout_chunks: list[bytes] = []
    stderr_chunks: list[bytes] = []
    last_data = time.monotonic()
    while True:
        received = False
        if channel.recv_ready():
            stdout_chunks.append(channel.recv(READ_SIZE))
            received = True
        if channel.recv_stderr_ready():
            stderr_chunks.append(channel.recv_stderr(READ_SIZE))
            received = True
        if received:
            last_data = time.monotonic()
            continue
        if channel.eof_received or channel.closed:
            break
        if time.monotonic() - last_data > timeout:
            raise socket.timeout(f'no data for {timeout}s')
        time.sleep(POLL_INTERVAL)

    # data that arrived together with the EOF
    while channel.recv_ready():
        stdout_chunks.append(channel.recv(READ_SIZE))
    while channel.recv_stderr_ready():
        stderr_chunks.append(channel.recv_stderr(READ_SIZE))
    return b''.join(stdout_chunks), b''.join(stderr_chunks)


def _run(connection: SSHConnection, command: str) -> ExecResult:
    """Blocking part of an execution. Always closes the connection."""
    target = connection.config.target
    try:
        ssh = connection.connect()
        connection.ensure_open()
        try:
            stdin, stdout, _ = ssh.exec_command(command, timeout=connection.timeout)
            # No interactive input: remote reads on stdin see EOF
            stdin.close()
            channel = stdout.channel
            output, errors = _drain(channel, connection.timeout)
            exit_status = channel.recv_exit_status()
        except socket.timeout as exc:
            raise SSHTimeoutError(
                f'no output from {target} within {connection.timeout}s', exc
            ) from exc
        except (paramiko.SSHException, OSError, EOFError) as exc:
            raise ExecutionError(f'command failed to run on {target}: {exc}', exc) from exc
    finally:
        connection.close()

    if exit_status == -1:
        # paramiko reports -1 when the server closed the channel without a status
        exit_status = None
    if exit_status:
        LOGGER.info('Command on %s exited with status %s', target, exit_status)
    if errors:
        LOGGER.debug('Command on %s wrote %d bytes to stderr', target, len(errors))
    return ExecResult.from_output(
        output.decode('utf-8', errors='replace'),
        errors.decode('utf-8', errors='replace'),
        exit_status,
    )


async def exec_ssh_command(
    config: SSHConfig,
    command: str,
    *,
    timeout: float | None = None,
    max_chars: int | None = None,
) -> ExecResult:
    """
    Run one command on the host described by config and return its output.

    Raises a subclass of ExecutionError on failure: SSHConnectionError
    (SSHTimeoutError when the timeout expires), AuthenticationError,
    DecryptError, CommandRejectedError. A non-zero remote exit status is not
    an error; it is reported in ExecResult.exit_status.
    """
    command = sanitize_command(command, max_chars)
    timeout = DEFAULT_TIMEOUT if timeout is None else timeout
    connection = SSHConnection(config, timeout=timeout)
    LOGGER.info('Running command on %s', config.target)
    try:
        return await asyncio.wait_for(asyncio.to_thread(_run, connection, command), timeout)
    except asyncio.TimeoutError as exc:
        raise SSHTimeoutError(
            f'command on {config.target} did not complete within {timeout}s', exc
        ) from exc
    finally:
        # Unblocks the worker thread if it is still waiting on the network
        connection.close()


def run_ssh_command(
    config: SSHConfig,
    command: str,
    *,
    timeout: float | None = None,
    max_chars: int | None = None,
) -> ExecResult:
    """Blocking twin of exec_ssh_command. Must not be called from a running event loop."""
    return asyncio.run(exec_ssh_command(config, command, timeout=timeout, max_chars=max_chars))
