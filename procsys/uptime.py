"""System uptime from /proc/uptime."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import IO, AnyStr

from .procfile import ParseError, read_file

UPTIME_PATH = Path("/proc/uptime")


def _to_duration(seconds: float) -> timedelta:
    whole = math.trunc(seconds)
    centis = math.floor((seconds - whole) * 100.0 + 0.5)
    return timedelta(seconds=whole, microseconds=centis * 10_000)


@dataclass(frozen=True)
class Uptime:
    """Uptime of the system and the summed idle time of all cores, in seconds."""

    uptime: float
    idle: float

    @classmethod
    def parse(cls, text: str) -> Uptime:
        """Parse the contents of /proc/uptime."""
        parts = text.strip().split(" ")
        if len(parts) < 2:
            raise ParseError(f"expected two fields in uptime, got {text!r}")
        try:
            return cls(uptime=float(parts[0]), idle=float(parts[1]))
        except ValueError as exc:
            raise ParseError(f"invalid uptime {text!r}") from exc

    @classmethod
    def from_reader(cls, reader: IO[AnyStr]) -> Uptime:
        """Parse uptime data read from a text or binary file object."""
        data = reader.read()
        if isinstance(data, bytes):
            data = data.decode("utf-8", errors="replace")
        return cls.parse(data)

    @classmethod
    def current(cls) -> Uptime:
        """Read the uptime of the running system."""
        return cls.parse(read_file(UPTIME_PATH))

    def uptime_duration(self) -> timedelta:
        """The uptime (including suspend) at centisecond precision."""
        return _to_duration(self.uptime)

    def idle_duration(self) -> timedelta:
        """The summed idle time of all cores at centisecond precision."""
        return _to_duration(self.idle)