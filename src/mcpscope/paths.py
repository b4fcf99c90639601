# Path resolution: scope identifier -> physical config document
import logging
from pathlib import Path

from mcpscope.config import CONFIG_FILENAME, get_config_path
from mcpscope.errors import NestedEnvironmentUnavailable
from mcpscope.models import Platform, Scope

logger = logging.getLogger(__name__)


def native_config_path(platform: Platform, filename: str = CONFIG_FILENAME) -> Path:
    """Return the native document path; it may not exist yet.

    Raises:
        HomeDirectoryUnavailable: If the platform has no home directory
    """
    return get_config_path(platform.home_dir(), filename)


def find_nested_config(platform: Platform, filename: str = CONFIG_FILENAME) -> Path | None:
    """Return the nested-environment document if one is discoverable.

    ABOUTME: Always None on platforms without a nested environment
    """
    if not platform.supports_nested:
        return None
    return platform.find_nested_config(filename)


def resolve_config_path(
    scope: Scope,
    platform: Platform,
    filename: str = CONFIG_FILENAME,
) -> Path:
    """Map a scope to the document that must be read or written.

    ABOUTME: Nested global requires a discoverable WSL document
    ABOUTME: Native global returns ~/.claude.json unconditionally (lazy creation)
    ABOUTME: POSIX-style project paths prefer WSL on Windows, others stay native
    ABOUTME: Legacy global prefers an existing native file, then WSL, then native

    Args:
        scope: Parsed scope identifier
        platform: Host platform capabilities
        filename: Document filename

    Returns:
        Absolute path of the document

    Raises:
        HomeDirectoryUnavailable: If no native home directory exists
        NestedEnvironmentUnavailable: If the nested scope cannot be located
    """
    if scope.kind == "nested":
        if not platform.supports_nested:
            raise NestedEnvironmentUnavailable(
                f"No nested environment is available on {platform.name}"
            )
        nested = platform.find_nested_config(filename)
        if nested is None:
            raise NestedEnvironmentUnavailable(
                f"No {filename} found in any WSL distribution"
            )
        return nested

    if scope.kind == "native":
        return native_config_path(platform, filename)

    if scope.kind == "project":
        project_path = scope.project_path or ""
        if platform.supports_nested and project_path.startswith("/"):
            nested = platform.find_nested_config(filename)
            if nested is not None:
                return nested
            logger.debug(
                f"No WSL config for POSIX project {project_path}, using native config"
            )
        return native_config_path(platform, filename)

    # Legacy global sentinel
    native = native_config_path(platform, filename)
    if native.exists():
        return native
    nested = find_nested_config(platform, filename)
    if nested is not None:
        return nested
    return native


def discover_config_paths(platform: Platform, filename: str = CONFIG_FILENAME) -> list[Path]:
    """Return every existing document, native first, without duplicates."""
    found: list[Path] = []
    native = native_config_path(platform, filename)
    if native.exists():
        found.append(native)
    nested = find_nested_config(platform, filename)
    if nested is not None and nested not in found:
        found.append(nested)
    return found
