"""
Environment-driven settings for ssh_exec.

Recognised environment variables:
    SSH_HOST            remote host (default 127.0.0.1)
    SSH_PORT            remote port (default 22)
    SSH_USER            account to log in as (default: current local user)
    SSH_PASSWORD        account password
    SSH_PRIVATE_KEY     private key text, takes precedence over SSH_KEY_PATH
    SSH_KEY_PATH        path to a private key file
    SSH_KEY_PASSPHRASE  passphrase for an encrypted key; set but empty means "no passphrase"
    SSH_TIMEOUT         seconds allowed for connect + auth + exec (default 20)
    SSH_MAX_CHARS       longest command accepted (default: no limit; "none" or <= 0 also disables)

Usage:
    from ssh_exec.config import config_from_env

    config = config_from_env(host='build01')   # keyword arguments override the environment
"""
import getpass
import logging
import os
from pathlib import Path
from typing import Mapping

from ssh_exec.models import SSHConfig

LOGGER = logging.getLogger(__name__)

DEFAULT_HOST = '127.0.0.1'
DEFAULT_PORT = 22
DEFAULT_TIMEOUT = 20.0


def _environ(environ: Mapping[str, str] | None) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def _parse_port(raw: str | None) -> int:
    if not raw:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f'SSH_PORT must be an integer, got {raw!r}') from None


def read_key_file(path: str | Path) -> str:
    """Read a private key file, expanding ~. The text is returned untouched."""
    return Path(path).expanduser().read_text()


def env_settings(environ: Mapping[str, str] | None = None) -> dict:
    """Collect SSHConfig fields from the environment without validating them."""
    environ = _environ(environ)

    private_key = environ.get('SSH_PRIVATE_KEY') or None
    key_path = environ.get('SSH_KEY_PATH')
    if private_key is None and key_path:
        LOGGER.debug('Reading private key from %s', key_path)
        private_key = read_key_file(key_path)

    return {
        'host': environ.get('SSH_HOST') or DEFAULT_HOST,
        'port': _parse_port(environ.get('SSH_PORT')),
        'username': environ.get('SSH_USER') or getpass.getuser(),
        'private_key': private_key,
        # '' is kept as-is: it is the explicit "no passphrase" marker
        'passphrase': environ.get('SSH_KEY_PASSPHRASE'),
        'password': environ.get('SSH_PASSWORD') or None,
    }


def config_from_env(environ: Mapping[str, str] | None = None, **overrides) -> SSHConfig:
    """Build an SSHConfig from the environment. Overrides that are None are ignored."""
    settings = env_settings(environ)
    settings.update({key: value for key, value in overrides.items() if value is not None})
    return SSHConfig(**settings)


def timeout_from_env(environ: Mapping[str, str] | None = None) -> float:
    raw = _environ(environ).get('SSH_TIMEOUT')
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        raise ValueError(f'SSH_TIMEOUT must be a number of seconds, got {raw!r}') from None
    if timeout <= 0:
        raise ValueError(f'SSH_TIMEOUT must be positive, got {raw!r}')
    return timeout


def max_chars_from_env(environ: Mapping[str, str] | None = None) -> int | None:
    """Command length limit, or None when no limit is set."""
    raw = _environ(environ).get('SSH_MAX_CHARS')
    if not raw:
        return None
    if raw.strip().lower() == 'none':
        return None
    try:
        limit = int(raw)
    except ValueError:
        raise ValueError(f'SSH_MAX_CHARS must be an integer or "none", got {raw!r}') from None
    return limit if limit > 0 else None
