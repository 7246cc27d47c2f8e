"""Entropy pool information for /dev/random under /proc/sys/kernel/random."""

from __future__ import annotations

from pathlib import Path

from .procfile import NotFoundError, read_value, write_value

RANDOM_ROOT = Path("/proc/sys/kernel/random")


def entropy_avail() -> int:
    """Available entropy in bits, from 0 to 4096."""
    return read_value(RANDOM_ROOT / "entropy_avail", int)


def poolsize() -> int:
    """Size of the entropy pool in bits."""
    return read_value(RANDOM_ROOT / "poolsize", int)


def read_wakeup_threshold() -> int:
    """Entropy bits needed to wake readers of /dev/random.

    Falls back to write_wakeup_threshold when read_wakeup_threshold is absent.
    """
    try:
        return read_value(RANDOM_ROOT / "read_wakeup_threshold", int)
    except NotFoundError:
        return read_value(RANDOM_ROOT / "write_wakeup_threshold", int)


def write_wakeup_threshold(new_value: int) -> None:
    """Set the entropy level below which writers of /dev/random are woken."""
    write_value(RANDOM_ROOT / "write_wakeup_threshold", new_value)


def uuid() -> str:
    """A freshly generated 128-bit UUID."""
    return read_value(RANDOM_ROOT / "uuid", str)


def boot_id() -> str:
    """The 128-bit UUID generated at boot."""
    return read_value(RANDOM_ROOT / "boot_id", str)