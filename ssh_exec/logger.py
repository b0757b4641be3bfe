'''
Logging setup for the ssh-exec CLI and API server.

As a library ssh_exec only creates loggers and never attaches handlers; the
host application decides where records go. The console scripts call
config_logging_for_app(), which reads a small YAML file and applies a
dictConfig with a console handler plus rotating text and JSON-lines files.
'''

import getpass
import logging.config
import shutil
import sys
from pathlib import Path

import yaml

import ssh_exec

LOG_FILE_MAX_BYTES = 2_000_000
LOG_FILE_BACKUPS = 20

LOGGING_CONFIG_TEMPLATE_PATH = Path(__file__).parent / 'logging-config.yaml'
LOGGING_CONFIG_DEFAULT_PATH = Path.home() / '.config' / 'ssh-exec' / 'logging-config.yaml'

_logging_configured = False


def initialize_logging_config() -> Path:
    '''Return the user's logging config file, creating it from the packaged template on first use.'''
    path = LOGGING_CONFIG_DEFAULT_PATH
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy(LOGGING_CONFIG_TEMPLATE_PATH, path)
    return path


def _log_directory(settings: dict) -> Path:
    directory = Path(settings['directory']).expanduser().absolute()
    if settings.get('use_user_subdir'):
        directory = directory / getpass.getuser()
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def _rotating_file(filename: Path, formatter: str) -> dict:
    return {
        'level': 'DEBUG',
        'class': 'logging.handlers.RotatingFileHandler',
        'formatter': formatter,
        'filename': filename,
        'maxBytes': LOG_FILE_MAX_BYTES,
        'backupCount': LOG_FILE_BACKUPS,
    }


def load_config(console_log_level: str | None = None) -> dict:
    '''Build the dictConfig mapping from the user's logging config file.

    The ssh_exec logger is returned with no handlers; config_logging_for_app
    attaches them.
    '''
    settings = yaml.safe_load(initialize_logging_config().read_text())
    log_dir = _log_directory(settings)

    # https://docs.python.org/3/library/logging.html#logrecord-attributes
    formatters = {
        'sshexec_console': {
            'format': '%(asctime)s %(levelname)-7s %(name)s: %(message)s',
            'datefmt': '%H:%M:%S',
        },
        'sshexec_text': {
            'format': '%(asctime)s %(levelname)s [%(process)d:%(threadName)s] %(module)s.%(funcName)s:%(lineno)d %(message)s',
            'datefmt': '%Y-%m-%dT%H:%M:%S%z',
        },
        'sshexec_json': {
            'class': 'pythonjsonlogger.json.JsonFormatter',
            'format': '%(asctime)s %(levelname)s %(name)s %(module)s %(funcName)s %(lineno)d %(process)d %(thread)d %(message)s',
            'datefmt': '%Y-%m-%dT%H:%M:%S%z',
        },
    }
    handlers = {
        'sshexec_console': {
            'level': console_log_level or settings['console_log_level'],
            'class': 'logging.StreamHandler',
            'formatter': 'sshexec_console',
            # stdout carries the remote command's output
            'stream': sys.stderr,
        },
        'sshexec_text_file': _rotating_file(log_dir / 'ssh-exec.log', 'sshexec_text'),
        'sshexec_json_file': _rotating_file(log_dir / 'ssh-exec.jsonl', 'sshexec_json'),
    }

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': formatters,
        'handlers': handlers,
        'loggers': {
            'ssh_exec': {'level': 'DEBUG', 'handlers': []},
            # paramiko logs every transport packet at DEBUG
            'paramiko': {'level': 'WARNING'},
        },
    }


def config_logging_for_app(verbose: bool = False):
    """Attach console and file handlers to the ssh_exec logger.

    Called once by the console scripts; later calls do nothing. ``verbose``
    lowers the console threshold to DEBUG.
    """
    global _logging_configured
    if _logging_configured:
        return

    log_config = load_config(console_log_level='DEBUG' if verbose else None)
    log_config['loggers']['ssh_exec']['handlers'] = list(log_config['handlers'])
    logging.config.dictConfig(log_config)
    _logging_configured = True

    logging.getLogger('ssh_exec').debug(
        'ssh-exec %s started by %s in %s: %s',
        ssh_exec.__version__, getpass.getuser(), Path.cwd(), sys.argv,
    )
