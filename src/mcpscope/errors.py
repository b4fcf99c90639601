# Error types raised by the config store
from pathlib import Path


class ConfigStoreError(Exception):
    """Base class for all config store failures.

    ABOUTME: str(error) is a human-readable message suitable for display
    """


class HomeDirectoryUnavailable(ConfigStoreError):
    """No home directory could be determined for the current user."""


class NestedEnvironmentUnavailable(ConfigStoreError):
    """The nested (WSL) scope was requested but no nested document was found."""


class UnreadableDocument(ConfigStoreError):
    """The config document exists but could not be read."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to read config {path}: {reason}")
        self.path = path


class MalformedDocument(ConfigStoreError):
    """The config document is not a JSON object."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to parse config {path}: {reason}")
        self.path = path


class BackupFailed(ConfigStoreError):
    """The document could not be snapshotted; nothing was written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to create backup of {path}: {reason}")
        self.path = path


class WriteFailed(ConfigStoreError):
    """Writing the document failed; a restore from backup was attempted.

    ABOUTME: restored is True only when the backup was copied back successfully
    """

    def __init__(self, path: Path, reason: str, restored: bool = False) -> None:
        super().__init__(f"Failed to write config {path}: {reason}")
        self.path = path
        self.restored = restored


class ServerNotFound(ConfigStoreError):
    """The named server entry is absent from the requested scope."""

    def __init__(self, name: str, scope_label: str) -> None:
        super().__init__(f"Server '{name}' not found in {scope_label} config")
        self.name = name
        self.scope_label = scope_label
