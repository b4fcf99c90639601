# ABOUTME: Availability probe for the external CLI
# ABOUTME: Any spawn failure counts as "not available", never as an error
import logging
import subprocess

from mcpscope.config import CLI_COMMAND, CLI_PROBE_TIMEOUT

logger = logging.getLogger(__name__)


def is_cli_available(command: str = CLI_COMMAND, timeout: int | None = None) -> bool:
    """Check whether the external CLI can be launched.

    ABOUTME: Runs `<command> --version` and checks for exit status 0
    ABOUTME: Missing binaries, permission errors and timeouts all return False

    Args:
        command: Executable to probe
        timeout: Timeout in seconds (default: CLI_PROBE_TIMEOUT)

    Returns:
        True if the command ran and exited successfully
    """
    if timeout is None:
        timeout = CLI_PROBE_TIMEOUT

    try:
        result = subprocess.run(
            [command, "--version"],
            capture_output=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.debug(f"{command} --version timed out after {timeout} seconds")
        return False
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug(f"{command} --version could not be started: {e}")
        return False

    return result.returncode == 0
