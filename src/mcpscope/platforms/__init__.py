# Platform registry
import sys

from mcpscope.models import NestedLocator, Platform
from mcpscope.platforms.native import NativeOnlyPlatform
from mcpscope.platforms.wsl import NativeWithNestedPlatform, WslLocator, wsl_root

__all__ = [
    "Platform",
    "NestedLocator",
    "NativeOnlyPlatform",
    "NativeWithNestedPlatform",
    "WslLocator",
    "wsl_root",
    "get_current_platform",
]


def get_current_platform() -> Platform:
    """Return the platform for the running interpreter.

    ABOUTME: Windows gets WSL probing; everything else is native only
    """
    if sys.platform == "win32":
        return NativeWithNestedPlatform()
    if sys.platform == "darwin":
        return NativeOnlyPlatform(name="macOS")
    return NativeOnlyPlatform(name="Linux")
