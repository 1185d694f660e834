"""
Standard exit codes for ghafs commands.

Following Unix/POSIX conventions for command-line tools.
"""
from .errors import GhafsError, MountError, NotFoundError, RemoteError

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, etc.)

# Application-specific exit codes (64-113 are typically available)
API_ERROR = 65           # GitHub API call failed
CONFIG_ERROR = 66        # Configuration file error
MOUNT_ERROR = 72         # Mount point missing or FUSE failed to start
NOT_FOUND = 73           # Path does not exist in the release tree
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

# Exit code mappings for filesystem errors
ERROR_EXIT_CODES = {
    RemoteError: API_ERROR,
    NotFoundError: NOT_FOUND,
    MountError: MOUNT_ERROR,
}


def get_exit_code_for_exception(exc: Exception) -> int:
    """
    Get the appropriate exit code for an exception.

    Args:
        exc: The exception that occurred

    Returns:
        Appropriate exit code
    """
    if isinstance(exc, KeyboardInterrupt):
        return INTERRUPTED
    if isinstance(exc, CommandError):
        return exc.exit_code
    for exc_type, code in ERROR_EXIT_CODES.items():
        if isinstance(exc, exc_type):
            return code
    return GENERAL_ERROR


class CommandError(GhafsError):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class ConfigError(CommandError):
    """Raised when there's a configuration error."""
    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)
