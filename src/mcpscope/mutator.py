# Safe read-modify-write of a config document
import logging
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from mcpscope.document import ConfigDocument, read_document, write_document
from mcpscope.errors import BackupFailed, WriteFailed
from mcpscope.utils.backup import create_backup, remove_backup, restore_backup

logger = logging.getLogger(__name__)

T = TypeVar("T")


def mutate_document(path: Path, change: Callable[[ConfigDocument], T]) -> T:
    """Apply one logical change to a document with backup and rollback.

    ABOUTME: Backs up an existing file before anything else; a missing file starts as {}
    ABOUTME: change() edits the dict in place; its exceptions abort before writing
    ABOUTME: A failed write restores the backup (best-effort) and raises WriteFailed
    ABOUTME: The backup is removed after success or a successful restore

    Args:
        path: Document to mutate
        change: Callable that edits the document in place

    Returns:
        Whatever change() returned

    Raises:
        BackupFailed: If the snapshot could not be taken (nothing written)
        UnreadableDocument, MalformedDocument: If the current file cannot be loaded
        WriteFailed: If the new content could not be written
    """
    backup_path: Path | None = None
    if path.exists():
        try:
            backup_path = create_backup(path)
        except OSError as e:
            raise BackupFailed(path, str(e)) from e

    try:
        data = read_document(path) if backup_path is not None else {}
        result = change(data)
    except BaseException:
        if backup_path is not None:
            remove_backup(backup_path)
        raise

    try:
        write_document(path, data)
    except OSError as e:
        restored = False
        if backup_path is not None:
            try:
                restore_backup(path, backup_path)
                restored = True
            except OSError as restore_error:
                logger.warning(
                    f"Failed to restore {path} from {backup_path}: {restore_error}; "
                    f"backup left in place"
                )
            if restored:
                remove_backup(backup_path)
        raise WriteFailed(path, str(e), restored=restored) from e

    if backup_path is not None:
        remove_backup(backup_path)
    logger.debug(f"Wrote {path}")
    return result
