"""Registered miscellaneous binary formats under /proc/sys/fs/binfmt_misc."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntFlag
from pathlib import Path
from typing import Union

from .procfile import (
    NotFoundError,
    ParseError,
    PermissionDeniedError,
    ProcError,
    read_file,
    read_value,
)

BINFMT_ROOT = Path("/proc/sys/fs/binfmt_misc")

_HEX = re.compile(r"[0-9a-fA-F]*")
_U8 = re.compile(r"\+?[0-9]+")
_NOT_ENTRIES = frozenset({"status", "register"})


def enabled() -> bool:
    """Whether the miscellaneous binary formats system is enabled."""
    return read_value(BINFMT_ROOT / "status", str) == "enabled"


def parse_hex(text: str) -> bytes:
    """Decode a string of hexadecimal digit pairs into bytes."""
    if len(text) % 2 != 0:
        raise ParseError(f"Hex string {text!r} has non-even length")
    if not _HEX.fullmatch(text):
        raise ParseError(f"Hex string {text!r} holds non-hex characters")
    return bytes.fromhex(text)


def _parse_offset(text: str) -> int:
    if not _U8.fullmatch(text):
        raise ParseError(f"invalid offset {text!r}")
    value = int(text)
    if value > 0xFF:
        raise ParseError(f"offset {text!r} out of range")
    return value


class BinFmtFlags(IntFlag):
    """Flags of a binary format entry."""

    P = 0x01
    """Preserve argv[0]."""
    O = 0x02  # noqa: E741
    """Open the binary and pass its descriptor to the interpreter."""
    C = 0x04
    """Compute credentials from the binary; implies O."""
    F = 0x08
    """Open the interpreter once when the entry is installed."""

    @classmethod
    def parse(cls, text: str) -> BinFmtFlags:
        """Collect the flag letters in ``text``, ignoring any other characters."""
        flags = cls(0)
        for char in text:
            if char in cls.__members__:
                flags |= cls[char]
        return flags


@dataclass(frozen=True)
class ExtensionData:
    """An entry matched by file extension (without the period)."""

    extension: str


@dataclass(frozen=True)
class MagicData:
    """An entry matched by a masked magic byte string at an offset."""

    offset: int
    magic: bytes
    mask: bytes


BinFmtData = Union[ExtensionData, MagicData]


@dataclass(frozen=True)
class BinFmtEntry:
    """A registered binary format."""

    name: str
    enabled: bool
    interpreter: str
    flags: BinFmtFlags
    data: BinFmtData

    @classmethod
    def from_string(cls, name: str, data: str) -> BinFmtEntry:
        """Parse the contents of an entry file."""
        is_enabled = False
        interpreter = ""
        extension: str | None = None
        offset = 0
        magic = b""
        mask = b""
        flags = BinFmtFlags(0)

        for line in data.splitlines():
            if line == "enabled":
                is_enabled = True
            elif line.startswith("interpreter "):
                interpreter = line[len("interpreter "):]
            elif line.startswith("flags:"):
                flags = BinFmtFlags.parse(line[len("flags:"):])
            elif line.startswith("extension ."):
                extension = line[len("extension ."):]
            elif line.startswith("offset "):
                offset = _parse_offset(line[len("offset "):])
            elif line.startswith("magic "):
                magic = parse_hex(line[len("magic "):])
            elif line.startswith("mask "):
                mask = parse_hex(line[len("mask "):])

        if magic and not mask:
            mask = b"\xff" * len(magic)

        entry_data: BinFmtData
        if extension is not None:
            entry_data = ExtensionData(extension)
        else:
            entry_data = MagicData(offset=offset, magic=magic, mask=mask)

        return cls(
            name=name,
            enabled=is_enabled,
            interpreter=interpreter,
            flags=flags,
            data=entry_data,
        )


def entries() -> list[BinFmtEntry]:
    """Read every registered binary format entry, ordered by name."""
    root = BINFMT_ROOT
    try:
        paths = sorted(root.iterdir())
    except FileNotFoundError as exc:
        raise NotFoundError(f"{root}: no such directory", root) from exc
    except PermissionError as exc:
        raise PermissionDeniedError(f"{root}: permission denied", root) from exc
    except OSError as exc:
        raise ProcError(f"{root}: {exc.strerror or exc}", root) from exc

    return [
        BinFmtEntry.from_string(path.name, read_file(path))
        for path in paths
        if path.name not in _NOT_ENTRIES
    ]