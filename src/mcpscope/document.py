# JSON document codec and scope views for ~/.claude.json
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any

from mcpscope.errors import MalformedDocument, UnreadableDocument
from mcpscope.models import Scope, ServerEntry

logger = logging.getLogger(__name__)

# ABOUTME: Raw parsed document; unknown keys are kept so writes never lose them
ConfigDocument = dict[str, Any]

MCP_SERVERS_KEY = "mcpServers"
PROJECTS_KEY = "projects"


def read_document(path: Path) -> ConfigDocument:
    """Read and parse a config document.

    ABOUTME: Callers check existence first; a missing file is an empty scope
    ABOUTME: The root must be a JSON object

    Raises:
        UnreadableDocument: On I/O failure
        MalformedDocument: If content is not a JSON object
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise UnreadableDocument(path, str(e)) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise MalformedDocument(path, str(e)) from e

    if not isinstance(data, dict):
        raise MalformedDocument(path, f"expected a JSON object, got {type(data).__name__}")

    return data


def write_document(path: Path, data: ConfigDocument) -> None:
    """Write a config document atomically.

    ABOUTME: Serializes with 2-space indentation and a trailing newline
    ABOUTME: Writes a temp file beside the target, fsyncs, then os.replace()
    ABOUTME: Symlinks are followed so the linked file is updated, not the link
    ABOUTME: An existing file keeps its permission bits
    ABOUTME: Creates parent directories if needed

    Raises:
        OSError: If the file cannot be written
    """
    target = Path(os.path.realpath(path))
    target.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        if target.exists():
            shutil.copymode(target, tmp_path)
        os.replace(tmp_path, target)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def parse_server_entry(name: str, data: Any) -> ServerEntry:
    """Convert a raw JSON entry into a ServerEntry, best-effort.

    ABOUTME: Missing or non-string type defaults to "stdio"
    ABOUTME: Fields of the wrong shape are dropped instead of failing the load
    ABOUTME: Non-string args items and env values are skipped
    """
    if not isinstance(data, dict):
        logger.debug(f"Server '{name}' is not an object, reading it as an empty stdio entry")
        data = {}

    server_type = data.get("type")
    if not isinstance(server_type, str):
        server_type = "stdio"

    url = data.get("url")
    command = data.get("command")

    args = data.get("args")
    if isinstance(args, list):
        args = [arg for arg in args if isinstance(arg, str)]
    else:
        args = None

    env = data.get("env")
    if isinstance(env, dict):
        env = {key: value for key, value in env.items() if isinstance(value, str)}
    else:
        env = None

    return ServerEntry(
        name=name,
        type=server_type,
        url=url if isinstance(url, str) else None,
        command=command if isinstance(command, str) else None,
        args=args,
        env=env,
    )


def server_entry_to_dict(entry: ServerEntry) -> dict[str, Any]:
    """Convert a ServerEntry to its persisted JSON form.

    ABOUTME: name is the map key, so it is not written into the value
    ABOUTME: Fields set to None are omitted
    """
    result: dict[str, Any] = {"type": entry.type}

    if entry.url is not None:
        result["url"] = entry.url
    if entry.command is not None:
        result["command"] = entry.command
    if entry.args is not None:
        result["args"] = list(entry.args)
    if entry.env is not None:
        result["env"] = dict(entry.env)

    return result


def get_servers_map(data: ConfigDocument, scope: Scope) -> dict[str, Any] | None:
    """Return the mcpServers map for a scope, or None if absent or not an object."""
    if scope.is_global:
        container: Any = data
    else:
        projects = data.get(PROJECTS_KEY)
        if not isinstance(projects, dict):
            return None
        container = projects.get(scope.project_path)
        if not isinstance(container, dict):
            return None

    servers = container.get(MCP_SERVERS_KEY)
    return servers if isinstance(servers, dict) else None


def ensure_servers_map(data: ConfigDocument, scope: Scope) -> dict[str, Any]:
    """Return the mcpServers map for a scope, creating missing containers.

    ABOUTME: Existing keys of the project object are left in place
    ABOUTME: Non-object values in the way are replaced with empty objects
    """
    if scope.is_global:
        container = data
    else:
        projects = data.get(PROJECTS_KEY)
        if not isinstance(projects, dict):
            projects = data[PROJECTS_KEY] = {}
        container = projects.get(scope.project_path)
        if not isinstance(container, dict):
            container = projects[scope.project_path] = {}

    servers = container.get(MCP_SERVERS_KEY)
    if not isinstance(servers, dict):
        servers = container[MCP_SERVERS_KEY] = {}
    return servers


def list_entries(data: ConfigDocument, scope: Scope) -> list[ServerEntry]:
    """Parse every server entry in a scope, in document order."""
    servers = get_servers_map(data, scope)
    if servers is None:
        return []
    return [parse_server_entry(name, raw) for name, raw in servers.items()]


def list_project_paths(data: ConfigDocument) -> list[str]:
    """Return the project keys of a document, in document order."""
    projects = data.get(PROJECTS_KEY)
    if not isinstance(projects, dict):
        return []
    return list(projects.keys())
