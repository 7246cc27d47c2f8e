"""Limits of the in-kernel key retention facility under /proc/sys/kernel/keys."""

from __future__ import annotations

from pathlib import Path

from .procfile import read_value, write_value

KEYS_ROOT = Path("/proc/sys/kernel/keys")


def gc_delay() -> int:
    """Seconds after which revoked and expired keys are garbage collected."""
    return read_value(KEYS_ROOT / "gc_delay", int)


def persistent_keyring_expiry() -> int:
    """Seconds the persistent keyring's expiry timer is reset to on access."""
    return read_value(KEYS_ROOT / "persistent_keyring_expiry", int)


def maxbytes() -> int:
    """Maximum payload bytes a non-root user may hold in keys."""
    return read_value(KEYS_ROOT / "maxbytes", int)


def set_maxbytes(nbytes: int) -> None:
    """Set the maximum payload bytes for a non-root user."""
    write_value(KEYS_ROOT / "maxbytes", nbytes)


def maxkeys() -> int:
    """Maximum number of keys a non-root user may own."""
    return read_value(KEYS_ROOT / "maxkeys", int)


def set_maxkeys(keys: int) -> None:
    """Set the maximum number of keys for a non-root user."""
    write_value(KEYS_ROOT / "maxkeys", keys)


def root_maxbytes() -> int:
    """Maximum payload bytes the root user may hold in keys."""
    return read_value(KEYS_ROOT / "root_maxbytes", int)


def set_root_maxbytes(nbytes: int) -> None:
    """Set the maximum payload bytes for the root user."""
    write_value(KEYS_ROOT / "root_maxbytes", nbytes)


def root_maxkeys() -> int:
    """Maximum number of keys the root user may own."""
    return read_value(KEYS_ROOT / "root_maxkeys", int)


def set_root_maxkeys(keys: int) -> None:
    """Set the maximum number of keys for the root user."""
    write_value(KEYS_ROOT / "root_maxkeys", keys)