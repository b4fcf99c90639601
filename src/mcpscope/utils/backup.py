# ABOUTME: Backup utilities for the shared config document.
# ABOUTME: Backups sit beside the document as <name>.backup.<unix-seconds>[.<n>] and are transient.
import logging
import re
import shutil
import time
from pathlib import Path

logger = logging.getLogger(__name__)

BACKUP_MARKER = ".backup."


def get_backup_path(source_path: Path, timestamp: int | None = None) -> Path:
    """Return the backup path for a document.

    ABOUTME: Format: {original name}.backup.{unix seconds}

    Examples:
        >>> get_backup_path(Path("/home/u/.claude.json"), 1767225600)
        PosixPath('/home/u/.claude.json.backup.1767225600')
    """
    if timestamp is None:
        timestamp = int(time.time())
    return source_path.with_name(f"{source_path.name}{BACKUP_MARKER}{timestamp}")


def _claim_backup_path(source_path: Path) -> Path:
    """Reserve a backup name no other file uses.

    ABOUTME: Tries {name}.backup.{secs}, then {name}.backup.{secs}.1, .2, ...
    ABOUTME: The name is claimed with exclusive create, so concurrent writers never share one
    """
    base = get_backup_path(source_path)
    candidate = base
    counter = 0
    while True:
        try:
            with open(candidate, "x"):
                pass
            return candidate
        except FileExistsError:
            counter += 1
            candidate = base.with_name(f"{base.name}.{counter}")


def create_backup(source_path: Path) -> Path:
    """Create a timestamped copy of a file next to it.

    ABOUTME: Uses shutil.copy2() to preserve file metadata
    ABOUTME: Never overwrites an earlier backup, even one taken the same second

    Args:
        source_path: Path to file to back up

    Returns:
        Path to created backup file

    Raises:
        FileNotFoundError: If source_path doesn't exist
        OSError: If backup creation fails
    """
    if not source_path.exists():
        raise FileNotFoundError(f"Source file not found: {source_path}")

    backup_path = _claim_backup_path(source_path)
    try:
        shutil.copy2(source_path, backup_path)
    except BaseException:
        backup_path.unlink(missing_ok=True)
        raise
    logger.debug(f"Created backup: {backup_path}")
    return backup_path


def restore_backup(source_path: Path, backup_path: Path) -> None:
    """Copy a backup back over the original file.

    Raises:
        FileNotFoundError: If backup_path doesn't exist
        OSError: If the copy fails
    """
    if not backup_path.exists():
        raise FileNotFoundError(f"Backup file not found: {backup_path}")

    shutil.copy2(backup_path, source_path)
    logger.debug(f"Restored {source_path} from {backup_path}")


def remove_backup(backup_path: Path) -> bool:
    """Delete a backup file, best-effort.

    ABOUTME: Logs a warning on failure instead of raising

    Returns:
        True if the backup is gone afterwards
    """
    try:
        backup_path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"Failed to delete backup {backup_path}: {e}")
        return False
    logger.debug(f"Deleted backup: {backup_path}")
    return True


def find_orphaned_backups(source_path: Path) -> list[Path]:
    """List leftover backups of a document, newest first.

    ABOUTME: Backups survive only a failed restore or a killed process
    ABOUTME: Useful for manual recovery; nothing deletes them automatically
    """
    directory = source_path.parent
    if not directory.is_dir():
        return []

    pattern = re.compile(rf"^{re.escape(source_path.name)}\.backup\.(\d+)(?:\.(\d+))?$")
    backups: list[tuple[tuple[int, int], Path]] = []
    for file_path in directory.iterdir():
        match = pattern.match(file_path.name)
        if match and file_path.is_file():
            counter = int(match.group(2)) if match.group(2) else 0
            backups.append(((int(match.group(1)), counter), file_path))

    backups.sort(key=lambda x: x[0], reverse=True)
    return [path for _, path in backups]
