# Core data models for mcpscope
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Protocol, runtime_checkable

from mcpscope.config import GLOBAL_SCOPE, NATIVE_GLOBAL_SCOPE, NESTED_GLOBAL_SCOPE

# ABOUTME: Server types understood by the external CLI; others pass through untouched
SERVER_TYPES = ("http", "sse", "stdio")

ScopeKind = Literal["global", "native", "nested", "project"]


@dataclass(frozen=True)
class ServerEntry:
    """One named MCP server entry.

    ABOUTME: name is the map key in JSON and is not written into the value
    ABOUTME: None means the field is absent from the persisted entry
    ABOUTME: type is kept as a plain string so unknown kinds survive a round-trip
    """
    name: str
    type: str = "stdio"
    url: str | None = None
    command: str | None = None
    args: list[str] | None = None
    env: dict[str, str] | None = None


@dataclass(frozen=True)
class Scope:
    """A parsed scope identifier.

    ABOUTME: kind "global" is the legacy sentinel resolved by fallback rules
    ABOUTME: project_path is set only for kind "project"
    """
    kind: ScopeKind
    project_path: str | None = None

    @classmethod
    def parse(cls, scope_id: str) -> "Scope":
        """Parse a caller-supplied scope id.

        Sentinels win over project paths with the same spelling.
        """
        if scope_id == NATIVE_GLOBAL_SCOPE:
            return cls("native")
        if scope_id == NESTED_GLOBAL_SCOPE:
            return cls("nested")
        if scope_id == GLOBAL_SCOPE:
            return cls("global")
        return cls("project", scope_id)

    @classmethod
    def project(cls, path: str) -> "Scope":
        return cls("project", path)

    @property
    def is_global(self) -> bool:
        return self.kind != "project"

    @property
    def label(self) -> str:
        """Scope name used in user-facing messages ('user' or 'project')."""
        return "user" if self.is_global else "project"

    def __str__(self) -> str:
        if self.kind == "native":
            return NATIVE_GLOBAL_SCOPE
        if self.kind == "nested":
            return NESTED_GLOBAL_SCOPE
        if self.kind == "global":
            return GLOBAL_SCOPE
        return self.project_path or ""


@dataclass(frozen=True)
class StoreResponse:
    """Outcome of a mutating store operation, ready for display."""
    success: bool
    message: str


@runtime_checkable
class NestedLocator(Protocol):
    """Finds the config document inside a nested environment.

    ABOUTME: Injected into NativeWithNestedPlatform so tests can fake WSL
    """

    def find(self, filename: str) -> Path | None:
        """Return the first matching document path, or None."""
        ...


@runtime_checkable
class Platform(Protocol):
    """Host platform capabilities used by the path resolver.

    ABOUTME: Implemented by NativeOnlyPlatform and NativeWithNestedPlatform
    """

    @property
    def name(self) -> str:
        """Human-readable platform name."""
        ...

    @property
    def supports_nested(self) -> bool:
        """Whether a nested environment can exist on this platform."""
        ...

    def home_dir(self) -> Path:
        """Native home directory; raises HomeDirectoryUnavailable."""
        ...

    def find_nested_config(self, filename: str) -> Path | None:
        """Locate the document in the nested environment, or None."""
        ...
