# ABOUTME: Shared fixtures for mcpscope tests.
# ABOUTME: Builds native homes and fake WSL distro trees under tmp_path.
import json
from pathlib import Path
from typing import Any

import pytest

from mcpscope.platforms import NativeOnlyPlatform, NativeWithNestedPlatform, WslLocator


def write_json(path: Path, data: dict[str, Any]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture
def native_home(tmp_path: Path) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def wsl_share(tmp_path: Path) -> Path:
    """Directory standing in for \\\\wsl$; distros are subdirectories."""
    root = tmp_path / "wsl"
    root.mkdir()
    return root


@pytest.fixture
def wsl_locator(wsl_share: Path) -> WslLocator:
    return WslLocator(root_for=lambda distro: wsl_share / distro)


@pytest.fixture
def native_platform(native_home: Path) -> NativeOnlyPlatform:
    return NativeOnlyPlatform(home=native_home)


@pytest.fixture
def nested_platform(native_home: Path, wsl_locator: WslLocator) -> NativeWithNestedPlatform:
    return NativeWithNestedPlatform(home=native_home, locator=wsl_locator)


@pytest.fixture
def wsl_config(wsl_share: Path) -> Path:
    """An existing, empty WSL document at Ubuntu:/home/u/.claude.json."""
    return write_json(wsl_share / "Ubuntu" / "home" / "u" / ".claude.json", {})
