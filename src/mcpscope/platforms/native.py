# Native-only platform (macOS, Linux)
from pathlib import Path

from mcpscope.config import get_home_dir


class NativeOnlyPlatform:
    """Platform with a single native home directory and no nested environment.

    ABOUTME: Implements the Platform protocol
    ABOUTME: Nested lookups always come back empty
    """

    def __init__(self, home: Path | None = None, name: str = "Native") -> None:
        """Initialize with an optional fixed home directory.

        ABOUTME: Defaults to Path.home() resolved on each call
        """
        self._home = home
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def supports_nested(self) -> bool:
        return False

    def home_dir(self) -> Path:
        return self._home if self._home is not None else get_home_dir()

    def find_nested_config(self, filename: str) -> Path | None:
        return None
