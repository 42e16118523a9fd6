"""Platform detection and mapping."""
import platform
from functools import lru_cache

from openv.errors import UnsupportedPlatformError
from openv.types import Arch, OperatingSystem, Platform

# platform.system() values
OS_MAPPINGS = {
    "darwin": OperatingSystem.APPLE,
    "linux": OperatingSystem.LINUX,
    "openbsd": OperatingSystem.OPENBSD,
    "freebsd": OperatingSystem.FREEBSD,
    "windows": OperatingSystem.WINDOWS,
}

# platform.machine() values
ARCH_MAPPINGS = {
    "x86_64": Arch.AMD64,
    "amd64": Arch.AMD64,
    "i386": Arch.X86_32,
    "i486": Arch.X86_32,
    "i586": Arch.X86_32,
    "i686": Arch.X86_32,
    "x86": Arch.X86_32,
    "aarch64": Arch.ARM64,
    "arm64": Arch.ARM64,
}


def detect_platform(system: str, machine: str) -> Platform:
    """Map platform.system() / platform.machine() values onto a Platform."""
    os = OS_MAPPINGS.get(system.lower())
    if os is None:
        raise UnsupportedPlatformError(system, machine)

    # op ships a single universal build for macOS
    if os is OperatingSystem.APPLE:
        return Platform(os=os, arch=Arch.APPLE_UNIVERSAL)

    normalized = machine.lower()
    arch = ARCH_MAPPINGS.get(normalized)
    if arch is None and normalized.startswith("arm"):
        arch = Arch.ARM
    if arch is None:
        raise UnsupportedPlatformError(system, machine)

    return Platform(os=os, arch=arch)


@lru_cache(maxsize=None)
def current_platform() -> Platform:
    """Get the platform of the running host, computed once per process."""
    return detect_platform(platform.system(), platform.machine())


def is_platform_supported() -> bool:
    """Check if current platform is supported."""
    try:
        current_platform()
        return True
    except UnsupportedPlatformError:
        return False
