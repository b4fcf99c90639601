# ABOUTME: Utility modules for mcpscope
# ABOUTME: Exports backup, CLI probe, and validation functions

from mcpscope.utils.backup import (
    create_backup,
    find_orphaned_backups,
    get_backup_path,
    remove_backup,
    restore_backup,
)
from mcpscope.utils.probe import is_cli_available
from mcpscope.utils.validation import (
    ValidationError,
    validate_command_exists,
    validate_server_entry,
    validate_url,
)

__all__ = [
    "create_backup",
    "find_orphaned_backups",
    "get_backup_path",
    "remove_backup",
    "restore_backup",
    "is_cli_available",
    "ValidationError",
    "validate_command_exists",
    "validate_server_entry",
    "validate_url",
]
