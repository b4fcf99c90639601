# ABOUTME: Tests for the JSON document codec.
# ABOUTME: Covers reading, best-effort entry parsing, serialization and scope views.
import json
import stat
import sys
from pathlib import Path

import pytest

from conftest import read_json, write_json
from mcpscope.document import (
    ensure_servers_map,
    get_servers_map,
    list_entries,
    list_project_paths,
    parse_server_entry,
    read_document,
    server_entry_to_dict,
    write_document,
)
from mcpscope.errors import MalformedDocument, UnreadableDocument
from mcpscope.models import Scope, ServerEntry


class TestReadDocument:
    """Tests for read_document."""

    def test_reads_object(self, tmp_path: Path) -> None:
        """Test reading a valid document."""
        path = write_json(tmp_path / ".claude.json", {"mcpServers": {}, "numStartups": 3})

        assert read_document(path) == {"mcpServers": {}, "numStartups": 3}

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Test that broken JSON raises MalformedDocument."""
        path = tmp_path / ".claude.json"
        path.write_text("{not json")

        with pytest.raises(MalformedDocument) as exc_info:
            read_document(path)
        assert exc_info.value.path == path

    def test_non_object_root(self, tmp_path: Path) -> None:
        """Test that a JSON array root is rejected."""
        path = tmp_path / ".claude.json"
        path.write_text("[1, 2]")

        with pytest.raises(MalformedDocument, match="expected a JSON object"):
            read_document(path)

    def test_unreadable(self, tmp_path: Path) -> None:
        """Test that a directory in place of the file raises UnreadableDocument."""
        path = tmp_path / ".claude.json"
        path.mkdir()

        with pytest.raises(UnreadableDocument):
            read_document(path)


class TestParseServerEntry:
    """Tests for best-effort entry parsing."""

    def test_stdio_entry(self) -> None:
        """Test parsing a complete stdio entry."""
        server = parse_server_entry("airtable", {
            "type": "stdio",
            "command": "npx",
            "args": ["-y", "airtable-mcp-server"],
            "env": {"AIRTABLE_API_KEY": "YOUR_KEY"},
        })

        assert server == ServerEntry(
            name="airtable",
            type="stdio",
            command="npx",
            args=["-y", "airtable-mcp-server"],
            env={"AIRTABLE_API_KEY": "YOUR_KEY"},
        )

    def test_missing_type_defaults_to_stdio(self) -> None:
        """Test that entries without a type are read as stdio."""
        assert parse_server_entry("x", {"command": "node"}).type == "stdio"

    def test_unknown_type_preserved(self) -> None:
        """Test that unrecognized types pass through."""
        assert parse_server_entry("x", {"type": "websocket"}).type == "websocket"

    def test_wrong_shapes_dropped(self) -> None:
        """Test that wrong-shaped fields become absent."""
        server = parse_server_entry("x", {
            "type": 7,
            "url": ["not", "a", "string"],
            "command": None,
            "args": "not-a-list",
            "env": ["not", "a", "dict"],
        })

        assert server == ServerEntry(name="x", type="stdio")

    def test_non_string_items_skipped(self) -> None:
        """Test that non-string args items and env values are filtered out."""
        server = parse_server_entry("x", {
            "args": ["-y", 3, None, "pkg"],
            "env": {"A": "1", "B": 2},
        })

        assert server.args == ["-y", "pkg"]
        assert server.env == {"A": "1"}

    def test_non_object_entry(self) -> None:
        """Test that a non-object entry is read as an empty stdio entry."""
        assert parse_server_entry("x", "garbage") == ServerEntry(name="x")


class TestServerEntryToDict:
    """Tests for entry serialization."""

    def test_omits_absent_fields(self) -> None:
        """Test that None fields are not written."""
        server = ServerEntry(name="sentry", type="http", url="https://mcp.sentry.dev/mcp")

        assert server_entry_to_dict(server) == {
            "type": "http",
            "url": "https://mcp.sentry.dev/mcp",
        }

    def test_keeps_empty_collections(self) -> None:
        """Test that explicitly empty args/env are written."""
        server = ServerEntry(name="x", command="node", args=[], env={})

        assert server_entry_to_dict(server) == {
            "type": "stdio",
            "command": "node",
            "args": [],
            "env": {},
        }

    def test_name_not_in_value(self) -> None:
        """Test that the name stays out of the persisted value."""
        assert "name" not in server_entry_to_dict(ServerEntry(name="x"))


class TestWriteDocument:
    """Tests for write_document."""

    def test_pretty_printed(self, tmp_path: Path) -> None:
        """Test 2-space indentation and trailing newline."""
        path = tmp_path / ".claude.json"
        write_document(path, {"mcpServers": {"a": {"type": "stdio"}}})

        content = path.read_text()
        assert content == json.dumps({"mcpServers": {"a": {"type": "stdio"}}}, indent=2) + "\n"

    def test_creates_parent_directory(self, tmp_path: Path) -> None:
        """Test that missing parent directories are created."""
        path = tmp_path / "nested" / "dir" / ".claude.json"
        write_document(path, {})

        assert read_json(path) == {}

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        """Test that the atomic write leaves only the target file."""
        path = tmp_path / ".claude.json"
        write_document(path, {"a": 1})
        write_document(path, {"a": 2})

        assert [p.name for p in tmp_path.iterdir()] == [".claude.json"]
        assert read_json(path) == {"a": 2}

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
    def test_follows_symlink(self, tmp_path: Path) -> None:
        """Test that a symlinked document updates the linked file and stays a link."""
        target = write_json(tmp_path / "dotfiles" / "claude.json", {"keep": 1})
        link = tmp_path / "home" / ".claude.json"
        link.parent.mkdir()
        link.symlink_to(target)

        write_document(link, {"keep": 1, "added": True})

        assert link.is_symlink()
        assert read_json(target) == {"keep": 1, "added": True}
        assert [p.name for p in (tmp_path / "home").iterdir()] == [".claude.json"]
        assert [p.name for p in (tmp_path / "dotfiles").iterdir()] == ["claude.json"]

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
    def test_preserves_mode(self, tmp_path: Path) -> None:
        """Test that rewriting an existing file keeps its permission bits."""
        path = write_json(tmp_path / ".claude.json", {"a": 1})
        path.chmod(0o644)

        write_document(path, {"a": 2})

        assert stat.S_IMODE(path.stat().st_mode) == 0o644

    def test_failed_replace_keeps_original(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a failure before rename leaves the old content and no temp file."""
        path = write_json(tmp_path / ".claude.json", {"a": 1})

        def fail_replace(src, dst):
            raise OSError("rename failed")

        monkeypatch.setattr("mcpscope.document.os.replace", fail_replace)

        with pytest.raises(OSError, match="rename failed"):
            write_document(path, {"a": 2})

        assert read_json(path) == {"a": 1}
        assert [p.name for p in tmp_path.iterdir()] == [".claude.json"]


class TestScopeViews:
    """Tests for scope sub-tree helpers."""

    def test_global_servers(self) -> None:
        """Test reading the root mcpServers map."""
        data = {"mcpServers": {"a": {"type": "stdio"}}}

        assert get_servers_map(data, Scope.parse("Global")) == {"a": {"type": "stdio"}}

    def test_project_servers(self) -> None:
        """Test reading a project's mcpServers map."""
        data = {"projects": {"/p": {"mcpServers": {"b": {}}}}}

        assert get_servers_map(data, Scope.project("/p")) == {"b": {}}
        assert get_servers_map(data, Scope.project("/other")) is None

    def test_missing_maps(self) -> None:
        """Test that absent or non-object containers read as None."""
        assert get_servers_map({}, Scope.parse("Global")) is None
        assert get_servers_map({"projects": []}, Scope.project("/p")) is None
        assert get_servers_map({"mcpServers": "x"}, Scope.parse("Global")) is None

    def test_ensure_creates_project(self) -> None:
        """Test that ensure_servers_map builds the project object."""
        data: dict = {}
        servers = ensure_servers_map(data, Scope.project("/p"))
        servers["a"] = {"type": "stdio"}

        assert data == {"projects": {"/p": {"mcpServers": {"a": {"type": "stdio"}}}}}

    def test_ensure_preserves_project_keys(self) -> None:
        """Test that other keys of an existing project object survive."""
        data = {"projects": {"/p": {"allowedTools": ["Bash"], "history": []}}}
        ensure_servers_map(data, Scope.project("/p"))["a"] = {}

        assert data["projects"]["/p"] == {
            "allowedTools": ["Bash"],
            "history": [],
            "mcpServers": {"a": {}},
        }

    def test_list_entries_order(self) -> None:
        """Test that entries come back in document order."""
        data = {"mcpServers": {"z": {}, "a": {"type": "http", "url": "https://x"}}}
        names = [s.name for s in list_entries(data, Scope.parse("Global"))]

        assert names == ["z", "a"]

    def test_list_project_paths(self) -> None:
        """Test listing project keys."""
        assert list_project_paths({"projects": {"/b": {}, "/a": {}}}) == ["/b", "/a"]
        assert list_project_paths({"projects": "nope"}) == []
        assert list_project_paths({}) == []
