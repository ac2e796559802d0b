"""Locating the working year and reading and writing project files."""

from __future__ import annotations

import os
import re
import sys
from enum import Enum
from pathlib import Path

from adventkit.day import Day

ANSI_ITALIC = "\x1b[3m"
ANSI_BOLD = "\x1b[1m"
ANSI_RESET = "\x1b[0m"

YEAR_ENV_VAR = "AOC_YEAR"

_U32_PATTERN = re.compile(r"\+?[0-9]+")
_U32_MAX = 2**32 - 1


class WriteStage(Enum):
    """The step at which writing a file failed."""

    OPEN = "open"
    WRITE = "write"


class WriteError(Exception):
    """Raised when an existing file cannot be opened or written."""

    def __init__(self, stage: WriteStage, message: str) -> None:
        super().__init__(message)
        self.stage = stage


def _parse_year(text: str) -> int | None:
    text = text.strip()
    if not _U32_PATTERN.fullmatch(text):
        return None
    value = int(text)
    return value if value <= _U32_MAX else None


def config_path(root: str | Path | None = None) -> Path:
    """Path of the configuration file that records the working year."""
    base = Path.cwd() if root is None else Path(root)
    return base / ".cargo" / "config.toml"


def year_from_config(text: str) -> int | None:
    """Extract the quoted year from the ``AOC_YEAR`` line of a configuration file."""
    joined = "".join(line for line in text.splitlines() if YEAR_ENV_VAR in line)
    pieces = joined.split('"')
    if len(pieces) < 2:
        return None
    return _parse_year(pieces[-2])


def get_year() -> int | None:
    """The working year from the environment, else from the configuration file."""
    from_env = os.environ.get(YEAR_ENV_VAR)
    if from_env is not None:
        return _parse_year(from_env)
    try:
        text = config_path().read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    return year_from_config(text)


def get_year_or_exit() -> int:
    """The working year; prints an error and exits with status 1 when unset."""
    year = get_year()
    if year is None:
        print("Failed to get the currently set year.", file=sys.stderr)
        sys.exit(1)
    return year


def read_file(folder: str, day: Day, root: str | Path | None = None) -> str:
    """Read ``data/<folder>/<day>.txt`` below ``root``."""
    base = Path.cwd() if root is None else Path(root)
    return (base / "data" / folder / f"{day}.txt").read_text(encoding="utf-8")


def read_file_part(folder: str, day: Day, part: int, root: str | Path | None = None) -> str:
    """Read ``data/<folder>/<day>-<part>.txt`` below ``root``."""
    base = Path.cwd() if root is None else Path(root)
    return (base / "data" / folder / f"{day}-{part}.txt").read_text(encoding="utf-8")


def write_file(path: str | Path, data: bytes | str) -> None:
    """Replace the contents of an existing file; the file is never created."""
    payload = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    flags = os.O_WRONLY | os.O_TRUNC | getattr(os, "O_BINARY", 0)
    try:
        fd = os.open(path, flags)
    except OSError as exc:
        raise WriteError(WriteStage.OPEN, f"Failed to open file {path}") from exc
    with os.fdopen(fd, "wb") as handle:
        try:
            handle.write(payload)
        except OSError as exc:
            raise WriteError(WriteStage.WRITE, f"Failed to write to {path}: {exc}") from exc