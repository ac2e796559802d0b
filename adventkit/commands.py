"""The subcommands of the command-line tool."""

from __future__ import annotations

import subprocess
import sys
from collections.abc import Collection
from pathlib import Path
from typing import NoReturn

from adventkit import aoc_cli, benchmarks
from adventkit.config import WriteError, config_path, get_year_or_exit, write_file
from adventkit.day import Day, all_days
from adventkit.run_multi import run_multi
from adventkit.timings import Timings

TEMPLATE_PATH = Path("src") / "template" / "template.txt"
YEAR_KEY = "AOC_YEAR"

_AOC_MISSING = (
    'command "aoc" not found or not callable. '
    'Try running "cargo install aoc-cli" to install it.'
)
_DHAT_ARGS = ("--profile", "dhat", "--features", "dhat-heap")


def _fail(message: str) -> NoReturn:
    print(message, file=sys.stderr)
    sys.exit(1)


def _package_args(year: int | None) -> list[str]:
    return [] if year is None else ["-p", f"advent_of_code_{year}"]


def handle_all(is_release: bool) -> None:
    """Run every day's solution."""
    run_multi(set(all_days()), is_release, False)


def attempt_args(day: Day, year: int | None, test: str | None, dhat: bool) -> list[str]:
    """Cargo arguments that run the tests of ``day``'s solution."""
    args = ["test", *_package_args(year), "--bin", str(day)]
    if dhat:
        args.extend(_DHAT_ARGS)
    elif test is not None:
        args.append(test)
    args.append("--")
    return args


def handle_attempt(day: Day, test: str | None, dhat: bool) -> None:
    """Run the tests of ``day``'s solution, optionally only one test."""
    year = get_year_or_exit()
    subprocess.run(["cargo", *attempt_args(day, year, test, dhat)], check=False)


def _ensure_aoc() -> None:
    try:
        aoc_cli.check()
    except aoc_cli.AocCommandError:
        _fail(_AOC_MISSING)


def handle_download(day: Day) -> None:
    """Download the input and puzzle of ``day``; exit with status 1 on failure."""
    _ensure_aoc()
    try:
        aoc_cli.download(day)
    except aoc_cli.AocCommandError as exc:
        _fail(f"failed to call aoc-cli: {exc}")


def handle_read(day: Day) -> None:
    """Show the puzzle of ``day``; exit with status 1 on failure."""
    _ensure_aoc()
    try:
        aoc_cli.read(day)
    except aoc_cli.AocCommandError as exc:
        _fail(f"failed to call aoc-cli: {exc}")


def render_module(template: str, year: int | str, day: Day) -> str:
    """Fill the year and the day number into a solution module template."""
    return template.replace("YEAR_NUMBER", str(year)).replace("DAY_NUMBER", str(int(day)))


def _create_empty(path: str, label: str) -> None:
    try:
        with open(path, "w", encoding="utf-8"):
            pass
    except OSError as exc:
        _fail(f"Failed to create {label} file: {exc}")
    print(f'Created empty {label} file "{path}"')


def handle_scaffold(day: Day, overwrite: bool) -> None:
    """Create the solution module and empty input and example files for ``day``."""
    year = get_year_or_exit()
    input_path = f"{year}/data/inputs/{day}.txt"
    example_path = f"{year}/data/examples/{day}.txt"
    module_path = f"{year}/src/bin/{day}.rs"

    try:
        template = TEMPLATE_PATH.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        _fail(f"Failed to read module template: {exc}")

    try:
        handle = open(module_path, "w" if overwrite else "x", encoding="utf-8", newline="")
    except OSError as exc:
        _fail(f"Failed to create module file: {exc}")

    with handle:
        try:
            handle.write(render_module(template, year, day))
        except OSError as exc:
            _fail(f"Failed to write module contents: {exc}")
    print(f'Created module file "{module_path}"')

    _create_empty(input_path, "input")
    _create_empty(example_path, "example")

    print("---")
    print(f"🎄 Type `cargo solve {day}` to run your solution.")


def replace_year_line(text: str, year: int) -> str:
    """Replace every line mentioning the year key with a line setting ``year``."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    new_line = f'{YEAR_KEY} = "{year}"'
    replaced = [
        new_line if YEAR_KEY in line else line.removesuffix("\r") for line in lines
    ]
    return "\n".join(replaced) + "\n"


def set_year(year: int, root: str | Path | None = None) -> None:
    """Record ``year`` as the working year in the configuration file below ``root``.

    Raises OSError when the file cannot be read and WriteError when it
    cannot be written.
    """
    path = config_path(root)
    text = path.read_text(encoding="utf-8")
    write_file(path, replace_year_line(text, year))


def handle_set_year(year: int) -> None:
    """Switch the repository to ``year``; exit with status 1 on failure."""
    try:
        set_year(year)
    except WriteError as exc:
        print(exc, file=sys.stderr)
        _fail("Failed to write the new year to config.toml.")
    except (OSError, UnicodeDecodeError):
        _fail("Failed to read config.toml.")
    print(f"Set repository to year {year}.")


def solve_args(
    day: Day, year: int | None, release: bool, dhat: bool, submit_part: int | None
) -> list[str]:
    """Cargo arguments that run ``day``'s solution."""
    args = ["run", *_package_args(year), "--bin", str(day)]
    if dhat:
        args.extend(_DHAT_ARGS)
    elif release:
        args.append("--release")
    args.append("--")
    if submit_part is not None:
        args += ["--submit", str(submit_part)]
    return args


def handle_solve(day: Day, release: bool, dhat: bool, submit_part: int | None) -> None:
    """Run ``day``'s solution."""
    year = get_year_or_exit()
    subprocess.run(
        ["cargo", *solve_args(day, year, release, dhat, submit_part)], check=False
    )


def days_to_time(day: Day | None, run_all: bool, stored: Timings) -> set[Day]:
    """The days to benchmark: one day, every day, or the days not fully timed yet."""
    if day is not None:
        return {day}
    if run_all:
        return set(all_days())
    return {candidate for candidate in all_days() if not stored.is_day_complete(candidate)}


def handle_time(day: Day | None, run_all: bool, store: bool) -> None:
    """Benchmark solutions and optionally store the results and update the README."""
    stored = Timings.read_from_file()
    days: Collection[Day] = days_to_time(day, run_all, stored)
    timings = run_multi(days, True, True) or Timings()

    if not store:
        return

    merged = stored.merge(timings)
    merged.store_file()

    print()
    try:
        benchmarks.update(merged, year=get_year_or_exit())
    except benchmarks.ReadmeError:
        print("Failed to store updated benchmarks.", file=sys.stderr)
    else:
        print("Stored updated benchmarks.")