"""Kernel identity and miscellaneous tuning under /proc/sys/kernel."""

from __future__ import annotations

import re
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntFlag
from pathlib import Path
from typing import Union

from .procfile import ParseError, ProcError, read_value, write_value

KERNEL_ROOT = Path("/proc/sys/kernel")

THREADS_MIN = 20
"""Smallest value accepted by threads-max on Linux 4.1 or later."""
THREADS_MAX = 0x3FFF_FFFF
"""Largest value accepted by threads-max on Linux 4.1 or later."""

_UNSIGNED = re.compile(r"\+?[0-9]+")
_VERSION_PREFIX = re.compile(r"[0-9.]*")
_LEADING_DIGITS = re.compile(r"[0-9]*")


def _parse_unsigned(text: str, bits: int, message: str) -> int:
    if not _UNSIGNED.fullmatch(text):
        raise ParseError(message)
    value = int(text)
    if value >= 1 << bits:
        raise ParseError(message)
    return value


@dataclass(frozen=True, order=True)
class Version:
    """A kernel version in major.minor.patch form."""

    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a version string, ignoring anything after the numeric prefix."""
        prefix = _VERSION_PREFIX.match(text).group(0)
        parts = prefix.split(".")
        names = ("major", "minor", "patch")
        for index, name in enumerate(names):
            if index >= len(parts):
                raise ParseError(f"Missing {name} version component")
        major = _parse_unsigned(parts[0], 8, "Failed to parse major version")
        minor = _parse_unsigned(parts[1], 8, "Failed to parse minor version")
        patch = _parse_unsigned(parts[2], 16, "Failed to parse patch version")
        return cls(major=major, minor=minor, patch=patch)

    @classmethod
    def current(cls) -> Version:
        """The version of the running kernel."""
        return read_value(KERNEL_ROOT / "osrelease", cls.parse)


@dataclass(frozen=True)
class KernelType:
    """The kernel's system name, such as "Linux"."""

    sysname: str

    @classmethod
    def parse(cls, text: str) -> KernelType:
        """Wrap a kernel type string."""
        return cls(sysname=text)

    @classmethod
    def current(cls) -> KernelType:
        """The type of the running kernel."""
        return read_value(KERNEL_ROOT / "ostype", cls.parse)


_DATE_FORMATS = (
    ("{} +0000", "%a %b %d %H:%M:%S UTC %Y %z"),
    ("{}", "%a, %d %b %Y %H:%M:%S %z"),
)


def _parse_date(text: str, fmt: str) -> datetime | None:
    try:
        parsed = datetime.strptime(text, fmt)
        weekday = time.strptime(text, fmt).tm_wday
    except ValueError:
        return None
    if weekday != parsed.weekday():
        return None
    return parsed


@dataclass(frozen=True)
class BuildInfo:
    """Kernel build information from /proc/sys/kernel/version."""

    version: str
    flags: frozenset[str] = field(default_factory=frozenset)
    extra: str = ""

    @classmethod
    def parse(cls, text: str) -> BuildInfo:
        """Parse a build string such as "#1 SMP PREEMPT <date>"."""
        tokens = text.split(" ")
        first = tokens[0]
        if not first.startswith("#"):
            raise ParseError("Failed to parse kernel build version")
        version = first[1:]

        flags: set[str] = set()
        extra = ""
        rest = iter(tokens[1:])
        for token in rest:
            if all(char.isupper() for char in token):
                flags.add(token)
            else:
                extra = token + " "
                break
        extra += " ".join(rest)
        return cls(version=version, flags=frozenset(flags), extra=extra)

    @classmethod
    def current(cls) -> BuildInfo:
        """Build information of the running kernel."""
        return read_value(KERNEL_ROOT / "version", cls.parse)

    def smp(self) -> bool:
        """Whether the kernel was built with SMP."""
        return "SMP" in self.flags

    def preempt(self) -> bool:
        """Whether the kernel was built with PREEMPT."""
        return "PREEMPT" in self.flags

    def preemptrt(self) -> bool:
        """Whether the kernel was built with PREEMPTRT."""
        return "PREEMPTRT" in self.flags

    def version_number(self) -> int:
        """The number formed by the leading digits of the version, e.g. 21 for "21~1"."""
        digits = _LEADING_DIGITS.match(self.version).group(0)
        return _parse_unsigned(digits, 32, "Failed to parse version number")

    def extra_date(self) -> datetime:
        """The build date in the extra field, in local time."""
        for template, fmt in _DATE_FORMATS:
            parsed = _parse_date(template.format(self.extra), fmt)
            if parsed is not None:
                return parsed.astimezone()
        raise ProcError("Failed to parse extra field to date")


@dataclass(frozen=True)
class SemaphoreLimits:
    """System V semaphore limits from /proc/sys/kernel/sem."""

    semmsl: int
    semmns: int
    semopm: int
    semmni: int

    @classmethod
    def parse(cls, text: str) -> SemaphoreLimits:
        """Parse the four whitespace-separated limits."""
        names = ("SEMMSL", "SEMMNS", "SEMOPM", "SEMMNI")
        tokens = text.split()
        if len(tokens) < len(names):
            raise ParseError(f"Missing {names[len(tokens)]}")
        values = [
            _parse_unsigned(token, 64, f"Failed to parse {name}")
            for name, token in zip(names, tokens)
        ]
        return cls(*values)

    @classmethod
    def current(cls) -> SemaphoreLimits:
        """The semaphore limits of the running system."""
        return read_value(KERNEL_ROOT / "sem", cls.parse)


class AllowedFunctions(IntFlag):
    """SysRq functions that may be invoked."""

    ENABLE_CONTROL_LOG_LEVEL = 2
    ENABLE_CONTROL_KEYBOARD = 4
    ENABLE_DEBUGGING_DUMPS = 8
    ENABLE_SYNC_COMMAND = 16
    ENABLE_REMOUNT_READ_ONLY = 32
    ENABLE_SIGNALING_PROCESSES = 64
    ALLOW_REBOOT_POWEROFF = 128
    ALLOW_NICING_REAL_TIME_TASKS = 256


_ALL_FUNCTIONS = 0x1FE


class SysRq(Enum):
    """SysRq switched off or fully on; a partial set is an AllowedFunctions value."""

    DISABLE = 0
    ENABLE = 1


SysRqSetting = Union[SysRq, AllowedFunctions]


def parse_sysrq(text: str) -> SysRqSetting:
    """Parse the numeric contents of /proc/sys/kernel/sysrq."""
    number = _parse_unsigned(text, 16, f"invalid sysrq value {text!r}")
    if number == 0:
        return SysRq.DISABLE
    if number == 1:
        return SysRq.ENABLE
    if number & ~_ALL_FUNCTIONS:
        raise ParseError("Invalid value")
    return AllowedFunctions(number)


def sysrq_to_number(value: SysRqSetting) -> int:
    """The number that represents a SysRq setting."""
    if isinstance(value, SysRq):
        return value.value
    if isinstance(value, AllowedFunctions):
        return int(value)
    raise TypeError(f"not a sysrq setting: {value!r}")


def pid_max() -> int:
    """The maximum process ID number."""
    return read_value(KERNEL_ROOT / "pid_max", int)


def shmall() -> int:
    """System-wide limit on the total pages of System V shared memory."""
    return read_value(KERNEL_ROOT / "shmall", int)


def shmmax() -> int:
    """Maximum size of a System V shared memory segment."""
    return read_value(KERNEL_ROOT / "shmmax", int)


def set_shmmax(new_value: int) -> None:
    """Set the maximum size of a System V shared memory segment."""
    write_value(KERNEL_ROOT / "shmmax", new_value)


def shmmni() -> int:
    """System-wide maximum number of System V shared memory segments."""
    return read_value(KERNEL_ROOT / "shmmni", int)


def sysrq() -> SysRqSetting:
    """Functions allowed to be invoked by the SysRq key."""
    return read_value(KERNEL_ROOT / "sysrq", parse_sysrq)


def set_sysrq(new: SysRqSetting) -> None:
    """Set the functions allowed to be invoked by the SysRq key."""
    write_value(KERNEL_ROOT / "sysrq", sysrq_to_number(new))


def threads_max() -> int:
    """System-wide limit on the number of threads."""
    return read_value(KERNEL_ROOT / "threads-max", int)


def _running_version() -> Version | None:
    try:
        return Version.current()
    except ProcError:
        return None


def set_threads_max(new_limit: int) -> None:
    """Set the thread limit, checking the range enforced by Linux 4.1 and later."""
    kernel = _running_version()
    if (
        kernel is not None
        and kernel.major >= 4
        and kernel.minor >= 1
        and not THREADS_MIN <= new_limit <= THREADS_MAX
    ):
        raise ProcError(f"{new_limit} is outside the THREADS_MIN..=THREADS_MAX range")
    write_value(KERNEL_ROOT / "threads-max", new_limit)