"""Running several solution binaries and collecting their timings."""

from __future__ import annotations

import re
import subprocess
import sys
import threading
from collections.abc import Collection, Iterable
from pathlib import Path
from typing import IO

from adventkit.config import ANSI_BOLD, ANSI_ITALIC, ANSI_RESET, get_year_or_exit
from adventkit.day import Day, all_days
from adventkit.timings import Timing, Timings

SAMPLES_SUFFIX = " samples)"
MICRO_SUFFIX = "\u00b5s"

_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def _parse_float(text: str) -> float | None:
    if not _FLOAT_PATTERN.fullmatch(text):
        return None
    return float(text)


def _parse_with_unit(text: str, unit: str, factor: float) -> float | None:
    value = _parse_float(text.split(unit, 1)[0])
    return None if value is None else value * factor


def parse_time(line: str) -> tuple[str, float] | None:
    """Extract the timing text and its value in nanoseconds from a benchmark line."""
    timing = line.split(SAMPLES_SUFFIX, 1)[0].split("(")[-1].split("@", 1)[0].strip()

    if "ns" in timing:
        nanos = _parse_with_unit(timing, "ns", 1.0)
    elif MICRO_SUFFIX in timing:
        nanos = _parse_with_unit(timing, MICRO_SUFFIX, 1_000.0)
    elif "ms" in timing:
        nanos = _parse_with_unit(timing, "ms", 1_000_000.0)
    else:
        nanos = _parse_with_unit(timing, "s", 1_000_000_000.0)

    if nanos is None:
        return None
    return timing, nanos


def parse_exec_time(output: Iterable[str], day: Day) -> Timing:
    """Collect the part timings reported in the output of a timed solution run."""
    timing = Timing(day=day)
    for line in output:
        if SAMPLES_SUFFIX not in line:
            continue
        parsed = parse_time(line)
        if parsed is None:
            print(f"Could not parse timings from line: {line}", file=sys.stderr)
            continue
        timing_str, nanos = parsed
        part = line.split(":", 1)[0]
        if "Part 1" in part:
            timing.part_1 = timing_str
        elif "Part 2" in part:
            timing.part_2 = timing_str
        timing.total_nanos += nanos
    return timing


def _bin_path(day: Day, year: int) -> Path:
    return Path(f"{year}/src/bin/{day}.rs")


def _forward_lines(stream: IO[str]) -> None:
    for line in stream:
        print(line.removesuffix("\n"), file=sys.stderr)


def run_solution(day: Day, is_timed: bool, is_release: bool) -> list[str]:
    """Run the solution of ``day``, echoing its output and returning its stdout lines.

    Days without a solution file yield no lines and start nothing.
    """
    year = get_year_or_exit()
    if not _bin_path(day, year).exists():
        return []

    args = ["cargo", "run", "-p", f"advent_of_code_{year}", "--quiet", "--bin", str(day)]
    if is_release:
        args.append("--release")
    if is_timed:
        args += ["--", "--time"]

    process = subprocess.Popen(
        args,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        encoding="utf-8",
        errors="replace",
    )
    forwarder = threading.Thread(target=_forward_lines, args=(process.stderr,), daemon=True)
    forwarder.start()

    output = []
    for raw in process.stdout:
        line = raw.removesuffix("\n")
        print(line)
        output.append(line)

    forwarder.join()
    process.wait()
    return output


def run_multi(
    days_to_run: Collection[Day], is_release: bool, is_timed: bool
) -> Timings | None:
    """Run the given days in order; return their timings when ``is_timed``."""
    collected: list[Timing] = []
    need_space = False

    for day in all_days():
        if day not in days_to_run:
            continue
        if need_space:
            print()
        need_space = True

        print(f"{ANSI_BOLD}Day {day}{ANSI_RESET}")
        print("------")

        output = run_solution(day, is_timed, is_release)
        if not output:
            print("Not solved.")
        else:
            collected.append(parse_exec_time(output, day))

    if not is_timed:
        return None

    timings = Timings(data=collected)
    total_millis = timings.total_millis()
    print(
        f"\n{ANSI_BOLD}Total (Run):{ANSI_RESET} {ANSI_ITALIC}{total_millis:.2f}ms{ANSI_RESET}"
    )
    return timings