"""System V shared memory segments from /proc/sysvipc/shm."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from itertools import islice
from pathlib import Path
from typing import AnyStr

from .procfile import ParseError, read_file

SHM_PATH = Path("/proc/sysvipc/shm")

_I32 = (-(2**31), 2**31 - 1)
_U16 = (0, 2**16 - 1)
_U32 = (0, 2**32 - 1)
_U64 = (0, 2**64 - 1)

_LAYOUT = (
    ("key", _I32),
    ("shmid", _U64),
    ("perms", _U16),
    ("size", _U32),
    ("cpid", _I32),
    ("lpid", _I32),
    ("nattch", _U32),
    ("uid", _U16),
    ("gid", _U16),
    ("cuid", _U16),
    ("cgid", _U16),
    ("atime", _U64),
    ("dtime", _U64),
    ("ctime", _U64),
    ("rss", _U64),
    ("swap", _U64),
)

_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Shm:
    """One shared memory segment."""

    key: int
    shmid: int
    perms: int
    size: int
    cpid: int
    lpid: int
    nattch: int
    uid: int
    gid: int
    cuid: int
    cgid: int
    atime: int
    dtime: int
    ctime: int
    rss: int
    swap: int


def _parse_field(name: str, token: str, bounds: tuple[int, int]) -> int:
    low, high = bounds
    if not _INTEGER.fullmatch(token) or (low == 0 and token.startswith("-")):
        raise ParseError(f"invalid {name} value {token!r}")
    value = int(token)
    if not low <= value <= high:
        raise ParseError(f"{name} value {token!r} out of range")
    return value


def _parse_line(line: str) -> Shm:
    tokens = line.split()
    if len(tokens) < len(_LAYOUT):
        raise ParseError(f"too few fields in shm line {line!r}")
    return Shm(
        **{
            name: _parse_field(name, token, bounds)
            for (name, bounds), token in zip(_LAYOUT, tokens)
        }
    )


def parse_shm(reader: Iterable[AnyStr]) -> list[Shm]:
    """Parse shm table lines (the first one is a header) from any line iterable."""
    segments = []
    for line in islice(reader, 1, None):
        if isinstance(line, bytes):
            try:
                line = line.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise ParseError("shm line is not valid UTF-8") from exc
        segments.append(_parse_line(line))
    return segments


def shm_segments() -> list[Shm]:
    """Read the shared memory segments of the running system."""
    return parse_shm(read_file(SHM_PATH).splitlines())