"""Virtual memory tuning under /proc/sys/vm."""

from __future__ import annotations

from enum import IntEnum
from pathlib import Path

from .procfile import ParseError, read_value, write_value

VM_ROOT = Path("/proc/sys/vm")


class DropCache(IntEnum):
    """Which clean caches the kernel should drop."""

    DEFAULT = 0
    PAGE_CACHE = 1
    INODES = 2
    ALL = 3
    DISABLE = 4

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def parse(cls, text: str) -> DropCache:
        """Parse the numeric form of a drop cache value."""
        try:
            number = int(text)
        except ValueError as exc:
            raise ParseError("Fail to parse drop cache") from exc
        try:
            return cls(number)
        except ValueError as exc:
            raise ParseError("Unknown drop cache value") from exc


def admin_reserve_kbytes() -> int:
    """Free memory reserved for users with cap_sys_admin, in KiB."""
    return read_value(VM_ROOT / "admin_reserve_kbytes", int)


def set_admin_reserve_kbytes(kbytes: int) -> None:
    """Set the memory reserved for users with cap_sys_admin, in KiB."""
    write_value(VM_ROOT / "admin_reserve_kbytes", kbytes)


def compact_memory() -> None:
    """Compact all zones so free memory is contiguous where possible."""
    write_value(VM_ROOT / "compact_memory", 1)


def drop_caches(drop: DropCache) -> None:
    """Ask the kernel to drop clean caches, dentries and inodes."""
    write_value(VM_ROOT / "drop_caches", DropCache(drop))


def max_map_count() -> int:
    """Maximum number of memory map areas a process may have."""
    return read_value(VM_ROOT / "max_map_count", int)


def set_max_map_count(count: int) -> None:
    """Set the maximum number of memory map areas a process may have."""
    write_value(VM_ROOT / "max_map_count", count)