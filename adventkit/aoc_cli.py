"""Calling the external ``aoc`` command-line client."""

from __future__ import annotations

import subprocess
from collections.abc import Sequence

from adventkit.config import get_year, get_year_or_exit
from adventkit.day import Day

AOC_COMMAND = "aoc"


class AocCommandError(Exception):
    """Base error for failures of the ``aoc`` client."""


class CommandNotFound(AocCommandError):
    """The ``aoc`` client is not installed."""

    def __init__(self) -> None:
        super().__init__("aoc-cli is not present in environment.")


class CommandNotCallable(AocCommandError):
    """The ``aoc`` client could not be started."""

    def __init__(self) -> None:
        super().__init__("aoc-cli could not be called.")


class BadExitStatus(AocCommandError):
    """The ``aoc`` client exited with a non-zero status."""

    def __init__(self, output: subprocess.CompletedProcess) -> None:
        super().__init__("aoc-cli exited with a non-zero status.")
        self.output = output


def check() -> None:
    """Raise CommandNotFound unless the ``aoc`` client can be run."""
    try:
        subprocess.run([AOC_COMMAND, "-V"], capture_output=True, check=False)
    except OSError as exc:
        raise CommandNotFound() from exc


def get_input_path(day: Day, year: int | None = None) -> str:
    """Where the puzzle input of ``day`` is stored."""
    prefix = "" if year is None else f"{year}/"
    return f"{prefix}data/inputs/{day}.txt"


def get_puzzle_path(day: Day, year: int | None = None) -> str:
    """Where the puzzle description of ``day`` is stored."""
    prefix = "" if year is None else f"{year}/"
    return f"{prefix}data/puzzles/{day}.md"


def build_args(
    command: str, args: Sequence[str], day: Day, year: int | None = None
) -> list[str]:
    """Arguments for the ``aoc`` client: options, year, day, then the command."""
    cmd_args = list(args)
    if year is not None:
        cmd_args += ["--year", str(year)]
    cmd_args += ["--day", str(day), command]
    return cmd_args


def _call_aoc_cli(args: Sequence[str]) -> subprocess.CompletedProcess:
    try:
        output = subprocess.run([AOC_COMMAND, *args], check=False)
    except OSError as exc:
        raise CommandNotCallable() from exc
    if output.returncode != 0:
        raise BadExitStatus(output)
    return output


def read(day: Day) -> subprocess.CompletedProcess:
    """Show the puzzle description of ``day``."""
    year = get_year_or_exit()
    args = build_args(
        "read",
        ["--description-only", "--puzzle-file", get_puzzle_path(day, year)],
        day,
        year,
    )
    return _call_aoc_cli(args)


def download(day: Day) -> subprocess.CompletedProcess:
    """Download the input and puzzle description of ``day``."""
    year = get_year_or_exit()
    input_path = get_input_path(day, year)
    puzzle_path = get_puzzle_path(day, year)
    args = build_args(
        "download",
        ["--overwrite", "--input-file", input_path, "--puzzle-file", puzzle_path],
        day,
        year,
    )
    output = _call_aoc_cli(args)
    print("---")
    print(f'🎄 Successfully wrote input to "{input_path}".')
    print(f'🎄 Successfully wrote puzzle to "{puzzle_path}".')
    return output


def submit(day: Day, part: int, result: object) -> subprocess.CompletedProcess:
    """Submit ``result`` as the answer to ``part`` of ``day``."""
    args = build_args("submit", [], day, get_year())
    args += [str(part), str(result)]
    return _call_aoc_cli(args)