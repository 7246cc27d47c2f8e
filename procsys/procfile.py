"""Reading and writing single-value files under /proc, with typed errors."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TypeVar, Union

T = TypeVar("T")
PathLike = Union[str, "os.PathLike[str]"]


class ProcError(Exception):
    """Base error for every failure while reading or writing a proc file."""

    def __init__(self, message: str, path: PathLike | None = None) -> None:
        super().__init__(message)
        self.path = path


class NotFoundError(ProcError):
    """The requested proc file does not exist."""


class PermissionDeniedError(ProcError):
    """The caller may not read or write the proc file."""


class ParseError(ProcError, ValueError):
    """The contents of a proc file could not be understood."""


@contextmanager
def _os_errors(path: PathLike) -> Iterator[None]:
    try:
        yield
    except FileNotFoundError as exc:
        raise NotFoundError(f"{os.fspath(path)}: no such file", path) from exc
    except PermissionError as exc:
        raise PermissionDeniedError(f"{os.fspath(path)}: permission denied", path) from exc
    except OSError as exc:
        raise ProcError(f"{os.fspath(path)}: {exc.strerror or exc}", path) from exc
    except UnicodeDecodeError as exc:
        raise ParseError(f"{os.fspath(path)}: contents are not valid UTF-8", path) from exc


def read_file(path: PathLike) -> str:
    """Return the whole text of the file at ``path``."""
    with _os_errors(path):
        return Path(path).read_text(encoding="utf-8")


def read_value(path: PathLike, parse: Callable[[str], T]) -> T:
    """Read ``path``, strip surrounding whitespace and convert it with ``parse``."""
    text = read_file(path).strip()
    try:
        return parse(text)
    except ProcError:
        raise
    except ValueError as exc:
        raise ParseError(f"{os.fspath(path)}: cannot parse {text!r}: {exc}", path) from exc


def write_value(path: PathLike, value: object) -> None:
    """Write ``str(value)`` to an existing file, without creating or truncating it."""
    with _os_errors(path), open(os.open(path, os.O_WRONLY), "wb") as handle:
        handle.write(str(value).encode("utf-8"))