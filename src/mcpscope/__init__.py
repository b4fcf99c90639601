# mcpscope - Scoped MCP server config store for ~/.claude.json
# ABOUTME: Version information
__version__ = "0.1.0"

# ABOUTME: Export core data models and errors
from mcpscope.config import GLOBAL_SCOPE, NATIVE_GLOBAL_SCOPE, NESTED_GLOBAL_SCOPE
from mcpscope.errors import (
    BackupFailed,
    ConfigStoreError,
    HomeDirectoryUnavailable,
    MalformedDocument,
    NestedEnvironmentUnavailable,
    ServerNotFound,
    UnreadableDocument,
    WriteFailed,
)
from mcpscope.models import Platform, Scope, ServerEntry, StoreResponse

# ABOUTME: Export the store and platform implementations
from mcpscope.platforms import (
    NativeOnlyPlatform,
    NativeWithNestedPlatform,
    WslLocator,
    get_current_platform,
)
from mcpscope.store import ConfigStore

__all__ = [
    "__version__",
    "GLOBAL_SCOPE",
    "NATIVE_GLOBAL_SCOPE",
    "NESTED_GLOBAL_SCOPE",
    "ConfigStore",
    "ServerEntry",
    "Scope",
    "StoreResponse",
    "Platform",
    "NativeOnlyPlatform",
    "NativeWithNestedPlatform",
    "WslLocator",
    "get_current_platform",
    "ConfigStoreError",
    "HomeDirectoryUnavailable",
    "NestedEnvironmentUnavailable",
    "UnreadableDocument",
    "MalformedDocument",
    "BackupFailed",
    "WriteFailed",
    "ServerNotFound",
]
