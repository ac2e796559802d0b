"""Command-line entry point: argument parsing and subcommand dispatch."""

from __future__ import annotations

import re
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from adventkit import commands
from adventkit.config import get_year_or_exit
from adventkit.day import Day, DayError
from adventkit.new_year import handle_new_year

_U8_PATTERN = re.compile(r"\+?[0-9]+")
_U8_MAX = 255
_U32_MAX = 2**32 - 1

_TODAY_OUT_OF_SEASON = (
    "`today` command can only be run between the 1st and the 25th of december. "
    "Please use `scaffold` with a specific day."
)


class _CommandError(ValueError):
    """The subcommand is missing or unknown."""


class _ArgumentError(ValueError):
    """An argument of a known subcommand is missing or malformed."""


@dataclass(frozen=True)
class _Arguments:
    """The parsed command line."""

    command: str
    day: Day | None = None
    year: int | None = None
    release: bool = False
    dhat: bool = False
    submit: int | None = None
    test: str | None = None
    run_all: bool = False
    store: bool = False
    download: bool = False
    overwrite: bool = False


def _parse_unsigned(text: str, maximum: int) -> int | None:
    if not _U8_PATTERN.fullmatch(text):
        return None
    value = int(text)
    return value if value <= maximum else None


class _ArgList:
    """Remaining command-line arguments, consumed as they are recognised."""

    def __init__(self, argv: Sequence[str]) -> None:
        self._args = list(argv)

    def subcommand(self) -> str | None:
        if not self._args or self._args[0].startswith("-"):
            return None
        return self._args.pop(0)

    def contains(self, flag: str) -> bool:
        if flag in self._args:
            self._args.remove(flag)
            return True
        return False

    def value(self, key: str) -> str | None:
        prefix = f"{key}="
        for position, arg in enumerate(self._args):
            if arg == key:
                if position + 1 >= len(self._args):
                    raise _ArgumentError(f"the '{key}' option doesn't have an associated value")
                value = self._args[position + 1]
                del self._args[position : position + 2]
                return value
            if arg.startswith(prefix):
                del self._args[position]
                return arg[len(prefix):]
        return None

    def free(self) -> str | None:
        return self._args.pop(0) if self._args else None

    def required_free(self) -> str:
        value = self.free()
        if value is None:
            raise _ArgumentError("the required argument is missing")
        return value

    def remaining(self) -> list[str]:
        return list(self._args)


def _to_day(text: str) -> Day:
    try:
        return Day.parse(text)
    except DayError as exc:
        raise _ArgumentError(f"failed to parse '{text}': {exc}") from exc


def _to_year(text: str) -> int:
    year = _parse_unsigned(text, _U32_MAX)
    if year is None:
        raise _ArgumentError(f"failed to parse '{text}': invalid digit found in string")
    return year


def _to_part(text: str) -> int:
    part = _parse_unsigned(text, _U8_MAX)
    if part is None:
        raise _ArgumentError(f"failed to parse '{text}': invalid digit found in string")
    return part


def parse_args(argv: Sequence[str] | None = None) -> _Arguments:
    """Parse a command line (without the program name).

    Raises ValueError for a missing or unknown subcommand and for missing or
    malformed arguments. Unrecognised extra arguments produce a warning.
    """
    args = _ArgList(sys.argv[1:] if argv is None else argv)
    command = args.subcommand()

    if command is None:
        raise _CommandError("No command specified.")

    if command == "all":
        parsed = _Arguments(command, release=args.contains("--release"))
    elif command == "time":
        run_all = args.contains("--all")
        store = args.contains("--store")
        raw_day = args.free()
        parsed = _Arguments(
            command,
            day=None if raw_day is None else _to_day(raw_day),
            run_all=run_all,
            store=store,
        )
    elif command in ("download", "read"):
        parsed = _Arguments(command, day=_to_day(args.required_free()))
    elif command == "scaffold":
        download = args.contains("--download")
        overwrite = args.contains("--overwrite")
        parsed = _Arguments(
            command,
            day=_to_day(args.required_free()),
            download=download,
            overwrite=overwrite,
        )
    elif command == "solve":
        release = args.contains("--release")
        dhat = args.contains("--dhat")
        raw_submit = args.value("--submit")
        parsed = _Arguments(
            command,
            day=_to_day(args.required_free()),
            release=release,
            dhat=dhat,
            submit=None if raw_submit is None else _to_part(raw_submit),
        )
    elif command == "try":
        dhat = args.contains("--dhat")
        day = _to_day(args.required_free())
        parsed = _Arguments(command, day=day, test=args.free(), dhat=dhat)
    elif command in ("new-year", "set-year"):
        parsed = _Arguments(command, year=_to_year(args.required_free()))
    elif command in ("get-year", "today"):
        parsed = _Arguments(command)
    else:
        raise _CommandError(f"Unknown command: {command}")

    remaining = args.remaining()
    if remaining:
        listed = ", ".join(f'"{arg}"' for arg in remaining)
        print(f"Warning: unknown argument(s): [{listed}].", file=sys.stderr)

    return parsed


def _run_today() -> None:
    day = Day.today()
    if day is None:
        print(_TODAY_OUT_OF_SEASON, file=sys.stderr)
        sys.exit(1)
    commands.handle_scaffold(day, False)
    commands.handle_download(day)
    commands.handle_read(day)


def _dispatch(parsed: _Arguments) -> None:
    command = parsed.command
    if command == "all":
        commands.handle_all(parsed.release)
    elif command == "time":
        commands.handle_time(parsed.day, parsed.run_all, parsed.store)
    elif command == "download":
        commands.handle_download(parsed.day)
    elif command == "read":
        commands.handle_read(parsed.day)
    elif command == "scaffold":
        commands.handle_scaffold(parsed.day, parsed.overwrite)
        if parsed.download:
            commands.handle_download(parsed.day)
    elif command == "solve":
        commands.handle_solve(parsed.day, parsed.release, parsed.dhat, parsed.submit)
    elif command == "try":
        commands.handle_attempt(parsed.day, parsed.test, parsed.dhat)
    elif command == "today":
        _run_today()
    elif command == "new-year":
        handle_new_year(parsed.year)
    elif command == "set-year":
        commands.handle_set_year(parsed.year)
    elif command == "get-year":
        year = get_year_or_exit()
        print(f"The repository is currently set to {year}.")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the tool; exits with status 1 on a bad command line."""
    try:
        parsed = parse_args(argv)
    except _CommandError as exc:
        print(exc, file=sys.stderr)
        sys.exit(1)
    except _ArgumentError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    _dispatch(parsed)
    return 0


if __name__ == "__main__":
    sys.exit(main())