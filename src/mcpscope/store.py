# Config store: scoped access to MCP servers in ~/.claude.json
import logging
from pathlib import Path

from mcpscope.config import CLI_COMMAND, CONFIG_FILENAME, NATIVE_GLOBAL_SCOPE, NESTED_GLOBAL_SCOPE
from mcpscope.document import (
    ConfigDocument,
    ensure_servers_map,
    get_servers_map,
    list_entries,
    list_project_paths,
    read_document,
    server_entry_to_dict,
)
from mcpscope.errors import ServerNotFound
from mcpscope.models import Platform, Scope, ServerEntry, StoreResponse
from mcpscope.mutator import mutate_document
from mcpscope.paths import (
    discover_config_paths,
    find_nested_config,
    native_config_path,
    resolve_config_path,
)
from mcpscope.platforms import get_current_platform
from mcpscope.utils.probe import is_cli_available

logger = logging.getLogger(__name__)


class ConfigStore:
    """Read and mutate MCP server entries by scope.

    ABOUTME: Scope ids are "Global", "Global (Native)", "Global (WSL)" or a project path
    ABOUTME: Every mutation touches exactly one physical document
    ABOUTME: Not safe for concurrent writers on the same file
    """

    def __init__(
        self,
        platform: Platform | None = None,
        filename: str = CONFIG_FILENAME,
        cli_command: str = CLI_COMMAND,
    ) -> None:
        """Initialize the store.

        ABOUTME: Defaults to the platform of the running interpreter
        """
        self.platform = platform if platform is not None else get_current_platform()
        self.filename = filename
        self.cli_command = cli_command

    def resolve(self, scope_id: str) -> Path:
        """Return the document path a scope id maps to."""
        return resolve_config_path(Scope.parse(scope_id), self.platform, self.filename)

    def _load(self, path: Path) -> ConfigDocument:
        if not path.exists():
            return {}
        return read_document(path)

    def list_servers(self, scope_id: str) -> list[ServerEntry]:
        """List the servers configured in a scope.

        ABOUTME: A missing document or scope yields an empty list
        ABOUTME: Malformed entries are read best-effort

        Raises:
            UnreadableDocument, MalformedDocument: If the document cannot be loaded
            NestedEnvironmentUnavailable: For the WSL scope when no WSL config exists
        """
        scope = Scope.parse(scope_id)
        path = resolve_config_path(scope, self.platform, self.filename)
        return list_entries(self._load(path), scope)

    def get_server(self, name: str, scope_id: str) -> ServerEntry:
        """Return one server from a scope.

        Raises:
            ServerNotFound: If no server with that name exists in the scope
        """
        for server in self.list_servers(scope_id):
            if server.name == name:
                return server
        raise ServerNotFound(name, Scope.parse(scope_id).label)

    def add_server(self, entry: ServerEntry, scope_id: str) -> StoreResponse:
        """Add or replace a server in a scope.

        ABOUTME: Creates the document, projects entry and mcpServers map as needed
        ABOUTME: Replaces an existing server with the same name silently

        Raises:
            BackupFailed, WriteFailed: If the document could not be updated
        """
        scope = Scope.parse(scope_id)
        path = resolve_config_path(scope, self.platform, self.filename)
        server_data = server_entry_to_dict(entry)

        def change(data: ConfigDocument) -> None:
            ensure_servers_map(data, scope)[entry.name] = server_data

        mutate_document(path, change)
        logger.info(f"Added server '{entry.name}' to {scope} in {path}")
        return StoreResponse(
            success=True,
            message=f"Server '{entry.name}' added to {scope.label} config successfully",
        )

    def remove_server(self, name: str, scope_id: str) -> StoreResponse:
        """Remove a server from a scope.

        ABOUTME: Checks for the name before taking a backup
        ABOUTME: The check is repeated inside the mutation

        Raises:
            ServerNotFound: If the server is not in the scope
            BackupFailed, WriteFailed: If the document could not be updated
        """
        scope = Scope.parse(scope_id)
        path = resolve_config_path(scope, self.platform, self.filename)

        servers = get_servers_map(self._load(path), scope)
        if servers is None or name not in servers:
            raise ServerNotFound(name, scope.label)

        def change(data: ConfigDocument) -> None:
            current = get_servers_map(data, scope)
            if current is None or name not in current:
                raise ServerNotFound(name, scope.label)
            del current[name]

        mutate_document(path, change)
        logger.info(f"Removed server '{name}' from {scope} in {path}")
        return StoreResponse(
            success=True,
            message=f"Server '{name}' removed from {scope.label} config successfully",
        )

    def list_scopes(self) -> list[str]:
        """List selectable scopes.

        ABOUTME: Native global first, always (an empty scope is still usable)
        ABOUTME: WSL global second, only when a WSL document is discoverable
        ABOUTME: Then project paths from every discovered document, deduplicated and sorted
        """
        native = native_config_path(self.platform, self.filename)
        nested = find_nested_config(self.platform, self.filename)

        scopes = [NATIVE_GLOBAL_SCOPE]
        documents = [native] if native.exists() else []
        if nested is not None:
            scopes.append(NESTED_GLOBAL_SCOPE)
            if nested != native:
                documents.append(nested)

        project_paths: set[str] = set()
        for path in documents:
            project_paths.update(list_project_paths(read_document(path)))

        scopes.extend(sorted(project_paths))
        return scopes

    def config_file_exists(self) -> bool:
        """Whether a document exists natively or in WSL."""
        return bool(discover_config_paths(self.platform, self.filename))

    def is_cli_available(self) -> bool:
        """Whether the external CLI answers `--version`."""
        return is_cli_available(self.cli_command)
