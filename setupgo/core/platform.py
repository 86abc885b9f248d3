"""
Platform introspection for setup-go.

Reports the build agent's operating-system family and CPU architecture in the
naming convention used by pipeline nodes ('Linux', 'Windows', 'Darwin' and
'x86_64', 'ARM64'). Values published by the pipeline node through the
``os_family`` and ``architecture`` environment variables take precedence over
local detection.

Usage:
    from setupgo.core.platform import detect_platform

    info = detect_platform()
    print(f"OS family: {info.os_family}")
    print(f"Architecture: {info.architecture}")
"""

import os
import platform
from dataclasses import dataclass

OS_FAMILY_ENV = "os_family"
ARCHITECTURE_ENV = "architecture"


@dataclass(frozen=True)
class PlatformInfo:
    """
    Platform descriptor for a build agent.

    Attributes:
        os_family: Operating system family ('Linux', 'Windows', 'Darwin', ...)
        architecture: CPU architecture ('x86_64', 'ARM64', ...)
    """

    os_family: str
    architecture: str

    def __str__(self) -> str:
        return f"{self.os_family}-{self.architecture}"


def get_operating_system_family() -> str:
    """
    Get the operating system family of the build agent.

    Returns:
        OS family name; unknown systems are returned as reported by Python
    """
    family = os.environ.get(OS_FAMILY_ENV)
    if family:
        return family

    system = platform.system()
    lowered = system.lower()
    if lowered == "linux":
        return "Linux"
    elif lowered == "windows":
        return "Windows"
    elif lowered == "darwin":
        return "Darwin"
    return system


def get_architecture() -> str:
    """
    Get the CPU architecture of the build agent.

    Returns:
        'x86_64', 'ARM64', or the raw machine name for anything else
    """
    arch = os.environ.get(ARCHITECTURE_ENV)
    if arch:
        return arch

    machine = platform.machine()
    lowered = machine.lower()
    if lowered in ("x86_64", "amd64", "x64"):
        return "x86_64"
    elif lowered in ("aarch64", "arm64"):
        return "ARM64"
    return machine


def detect_platform() -> PlatformInfo:
    """
    Detect the current platform.

    Not cached: the pipeline node may publish its values at any point before
    the step runs.
    """
    return PlatformInfo(
        os_family=get_operating_system_family(),
        architecture=get_architecture(),
    )
