# Windows platform with WSL as the nested environment
import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from mcpscope.config import WSL_DISTROS, get_home_dir
from mcpscope.models import NestedLocator

logger = logging.getLogger(__name__)


def wsl_root(distro: str) -> Path:
    """Return the UNC root of a WSL distribution, e.g. \\\\wsl$\\Ubuntu."""
    return Path(f"\\\\wsl$\\{distro}")


class WslLocator:
    """Scan known WSL distributions for a config document.

    ABOUTME: Probes each distro root in order, then every /home/<user>/ inside it
    ABOUTME: root_for lets tests point distros at temporary directories
    """

    def __init__(
        self,
        distros: Iterable[str] = WSL_DISTROS,
        root_for: Callable[[str], Path] = wsl_root,
    ) -> None:
        self.distros = tuple(distros)
        self._root_for = root_for

    def find(self, filename: str) -> Path | None:
        """Return the first /home/*/<filename> found across distros.

        Unreachable distros and unreadable home directories are skipped.
        """
        for distro in self.distros:
            root = self._root_for(distro)
            if not root.exists():
                continue

            home_root = root / "home"
            try:
                user_homes = sorted(p for p in home_root.iterdir() if p.is_dir())
            except OSError as e:
                logger.debug(f"Cannot list {home_root}: {e}")
                continue

            for user_home in user_homes:
                candidate = user_home / filename
                if candidate.exists():
                    logger.debug(f"Found nested config in {distro}: {candidate}")
                    return candidate

        return None


class NativeWithNestedPlatform:
    """Platform with a native home plus a nested environment (Windows + WSL).

    ABOUTME: Implements the Platform protocol
    ABOUTME: Nested probing is delegated to an injectable NestedLocator
    """

    def __init__(
        self,
        home: Path | None = None,
        locator: NestedLocator | None = None,
        name: str = "Windows",
    ) -> None:
        self._home = home
        self._locator = locator if locator is not None else WslLocator()
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def supports_nested(self) -> bool:
        return True

    def home_dir(self) -> Path:
        return self._home if self._home is not None else get_home_dir()

    def find_nested_config(self, filename: str) -> Path | None:
        return self._locator.find(filename)
