"""Filesystem-related kernel variables under /proc/sys/fs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from .procfile import ParseError, read_file, read_value, write_value

FS_ROOT = Path("/proc/sys/fs")


def _integers(text: str, count: int, what: str) -> list[int]:
    tokens = text.split()
    if len(tokens) < count:
        raise ParseError(f"expected {count} fields in {what}, got {text!r}")
    try:
        return [int(token) for token in tokens[:count]]
    except ValueError as exc:
        raise ParseError(f"invalid number in {what}: {text!r}") from exc


@dataclass(frozen=True)
class DEntryState:
    """Status of the directory cache (dcache)."""

    nr_dentry: int
    nr_unused: int
    age_limit: timedelta
    want_pages: bool

    @classmethod
    def parse(cls, text: str) -> DEntryState:
        """Parse the contents of dentry-state."""
        nr_dentry, nr_unused, age_limit, want_pages = _integers(text, 4, "dentry-state")
        return cls(
            nr_dentry=nr_dentry,
            nr_unused=nr_unused,
            age_limit=timedelta(seconds=age_limit),
            want_pages=want_pages != 0,
        )


@dataclass(frozen=True)
class FileState:
    """Counts of allocated, free and maximum file handles."""

    allocated: int
    free: int
    maximum: int

    @classmethod
    def parse(cls, text: str) -> FileState:
        """Parse the contents of file-nr."""
        allocated, free, maximum = _integers(text, 3, "file-nr")
        return cls(allocated=allocated, free=free, maximum=maximum)


def dentry_state() -> DEntryState:
    """Read the status of the directory cache."""
    return DEntryState.parse(read_file(FS_ROOT / "dentry-state"))


def file_max() -> int:
    """System-wide limit on the number of open files."""
    return read_value(FS_ROOT / "file-max", int)


def set_file_max(maximum: int) -> None:
    """Set the system-wide limit on the number of open files."""
    write_value(FS_ROOT / "file-max", maximum)


def file_nr() -> FileState:
    """Read the file handle counters."""
    return FileState.parse(read_file(FS_ROOT / "file-nr"))


def max_user_watches() -> int:
    """Per-user limit on file descriptors registered across epoll instances."""
    return read_value(FS_ROOT / "epoll" / "max_user_watches", int)


def set_max_user_watches(value: int) -> None:
    """Set the per-user limit on epoll-registered file descriptors."""
    write_value(FS_ROOT / "epoll" / "max_user_watches", value)