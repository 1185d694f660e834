"""
Common CLI utilities and decorators for consistent command behavior.
"""

import sys
import click
from functools import wraps
from typing import Optional, Tuple

from rich.console import Console

from .config import ClientSettings, configure_logging, load_config
from .errors import GhafsError
from .exit_codes import GENERAL_ERROR, INTERRUPTED, get_exit_code_for_exception
from .api import parse_repo_spec

err_console = Console(stderr=True)


def handle_errors(func):
    """
    Decorator that maps ghafs errors to exit codes:
    - Error messages on stderr
    - Exit code from exit_codes for known error types
    - Click exceptions pass through unchanged
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            err_console.print("[yellow]Interrupted by user[/yellow]")
            sys.exit(INTERRUPTED)
        except click.ClickException:
            raise
        except GhafsError as e:
            err_console.print(f"[red]Error:[/red] {e}", markup=True, highlight=False)
            sys.exit(get_exit_code_for_exception(e))
        except (IsADirectoryError, NotADirectoryError) as e:
            kind = "Is a directory" if isinstance(e, IsADirectoryError) else "Not a directory"
            err_console.print(f"[red]Error:[/red] {kind}: {e}", markup=True, highlight=False)
            sys.exit(GENERAL_ERROR)
    return wrapper


def repo_argument(value: str) -> Tuple[str, str]:
    """Validate an OWNER/REPO argument."""
    try:
        return parse_repo_spec(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def _repo_callback(ctx, param, value):
    return repo_argument(value)


def load_settings(token: Optional[str] = None, verbose: bool = False):
    """
    Load config, configure logging and build the shared ClientSettings.

    Returns:
        Tuple of (config dict, ClientSettings)
    """
    config = load_config()
    log_config = config.get('logging', {})
    level = 'DEBUG' if verbose else log_config.get('level', 'INFO')
    configure_logging(level, log_config.get('format', '%(levelname)s: %(message)s'))
    return config, ClientSettings.from_config(config, token=token)


# Standard options that many commands share
common_options = {
    'repo': click.argument('repo', metavar='OWNER/REPO', callback=_repo_callback),
    'token': click.option('--token', envvar='GHAFS_GITHUB_TOKEN', default=None,
                          help='GitHub token (default: config, GHAFS_GITHUB_TOKEN or GITHUB_TOKEN)'),
    'verbose': click.option('-v', '--verbose', is_flag=True,
                            help='Enable debug logging'),
}


def add_common_options(*option_names):
    """
    Decorator to add common options to a command.

    Example:
        @add_common_options('repo', 'token', 'verbose')
        def my_command(repo, token, verbose):
            ...
    """
    def decorator(func):
        for name in reversed(option_names):
            if name in common_options:
                func = common_options[name](func)
        return func
    return decorator
