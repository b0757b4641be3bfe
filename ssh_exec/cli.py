'''
Command line entrypoint: run one command on a remote host.

    ssh-exec 'uname -a' --host build01 --user deploy --key ~/.ssh/id_ed25519

Options fall back to the SSH_* environment variables (see ssh_exec.config).
The remote stdout/stderr are passed through and the remote exit status becomes
the exit status of ssh-exec. Client-side failures exit with 1-4.
'''
import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from ssh_exec.config import config_from_env, max_chars_from_env, read_key_file, timeout_from_env
from ssh_exec.errors import ErrorKind, ExecutionError
from ssh_exec.logger import config_logging_for_app
from ssh_exec.utilities.ssh_command import run_ssh_command

LOGGER = logging.getLogger(__name__)

app = typer.Typer(add_completion=False)
console = Console(stderr=True)

EXIT_CODES = {
    ErrorKind.CONNECTION: 2,
    ErrorKind.AUTHENTICATION: 3,
    ErrorKind.DECRYPT: 4,
}


@app.command()
def main(
    command: str = typer.Argument(..., help="Command to run on the remote host"),
    host: Optional[str] = typer.Option(None, "--host", "-H", help="Remote host [env SSH_HOST]"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Remote SSH port [env SSH_PORT]"),
    user: Optional[str] = typer.Option(None, "--user", "-u", help="Remote account [env SSH_USER]"),
    key: Optional[Path] = typer.Option(None, "--key", "-i", help="Private key file [env SSH_KEY_PATH]"),
    passphrase: Optional[str] = typer.Option(None, "--passphrase", help="Passphrase for an encrypted key [env SSH_KEY_PASSPHRASE]"),
    password: Optional[str] = typer.Option(None, "--password", help="Account password [env SSH_PASSWORD]"),
    timeout: Optional[float] = typer.Option(None, "--timeout", "-t", help="Seconds for connect + run [env SSH_TIMEOUT]"),
    max_chars: Optional[int] = typer.Option(None, "--max-chars", help="Longest command accepted, 0 disables [env SSH_MAX_CHARS]"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to the console"),
):
    """
    Run COMMAND on a remote host over SSH and print its output.
    """
    config_logging_for_app(verbose=verbose)

    try:
        config = config_from_env(
            host=host,
            port=port,
            username=user,
            private_key=read_key_file(key) if key else None,
            passphrase=passphrase,
            password=password,
        )
        timeout = timeout if timeout is not None else timeout_from_env()
        if max_chars is None:
            max_chars = max_chars_from_env()
    except (ValidationError, ValueError, OSError) as exc:
        console.print(f'Invalid configuration: {exc}', style='bold red', markup=False)
        raise typer.Exit(code=1)

    try:
        result = run_ssh_command(config, command, timeout=timeout, max_chars=max_chars)
    except ExecutionError as exc:
        LOGGER.debug('Execution on %s failed', config.target, exc_info=True)
        console.print(str(exc), style='bold red', markup=False)
        raise typer.Exit(code=EXIT_CODES.get(exc.kind, 1))

    typer.echo(result.stdout, nl=False)
    if result.stderr:
        typer.echo(result.stderr, nl=False, err=True)
    raise typer.Exit(code=result.exit_status or 0)


def cli():
    '''Entry point for the ssh-exec console script'''
    app()


if __name__ == "__main__":
    cli()
