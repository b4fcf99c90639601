# Configuration constants and home-directory lookup for mcpscope
from pathlib import Path

from mcpscope.errors import HomeDirectoryUnavailable

# ABOUTME: Name of the shared document, identical on the host and inside WSL
CONFIG_FILENAME = ".claude.json"

# ABOUTME: Scope sentinels; any other scope id is a project path
GLOBAL_SCOPE = "Global"
NATIVE_GLOBAL_SCOPE = "Global (Native)"
NESTED_GLOBAL_SCOPE = "Global (WSL)"

# ABOUTME: WSL distributions probed, in order, for a nested document
WSL_DISTROS = (
    "Ubuntu",
    "Ubuntu-22.04",
    "Ubuntu-24.04",
    "Ubuntu-20.04",
    "Debian",
    "kali-linux",
    "openSUSE-Leap-15.5",
)

# ABOUTME: External CLI whose availability is probed
CLI_COMMAND = "claude"
CLI_PROBE_TIMEOUT = 10  # seconds


def get_home_dir() -> Path:
    """Return the current user's home directory.

    ABOUTME: Wraps Path.home() so a missing home surfaces as a store error

    Raises:
        HomeDirectoryUnavailable: If no home directory can be determined
    """
    try:
        return Path.home()
    except RuntimeError as e:
        raise HomeDirectoryUnavailable(f"Unable to find home directory: {e}") from e


def get_config_path(home: Path | None = None, filename: str = CONFIG_FILENAME) -> Path:
    """Return the native config document path.

    ABOUTME: Returns ~/.claude.json; the file may not exist yet
    """
    base = home if home is not None else get_home_dir()
    return base / filename
