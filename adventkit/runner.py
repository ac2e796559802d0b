"""Running, timing and submitting the parts of a puzzle solution."""

from __future__ import annotations

import re
import subprocess
import sys
import time
from collections.abc import Callable, Sequence
from contextlib import suppress
from typing import Any, NoReturn

from adventkit import aoc_cli
from adventkit.config import ANSI_BOLD, ANSI_ITALIC, ANSI_RESET
from adventkit.day import Day

ONE_SECOND_NS = 1_000_000_000
MIN_BENCH_ITERATIONS = 10
MAX_BENCH_ITERATIONS = 10_000

_SUBMIT_USAGE = "Unexpected command-line input. Format: cargo solve 1 --submit 1"
_AOC_MISSING = (
    'command "aoc" not found or not callable. '
    'Try running "cargo install aoc-cli" to install it.'
)
_U8_PATTERN = re.compile(r"\+?[0-9]+")


def _format_rust_duration(nanos: int, precision: int = 1) -> str:
    secs, subsec = divmod(nanos, ONE_SECOND_NS)
    if secs > 0:
        integer, frac, scale, suffix = secs, subsec, ONE_SECOND_NS, "s"
    elif subsec >= 1_000_000:
        integer, frac = divmod(subsec, 1_000_000)
        scale, suffix = 1_000_000, "ms"
    elif subsec >= 1_000:
        integer, frac = divmod(subsec, 1_000)
        scale, suffix = 1_000, "\u00b5s"
    else:
        integer, frac, scale, suffix = subsec, 0, 1, "ns"

    digits, remainder = divmod(frac * 10**precision, scale)
    if remainder > 0 and remainder * 2 >= scale:
        digits += 1
    if digits == 10**precision:
        integer += 1
        digits = 0
    return f"{integer}.{digits:0{precision}d}{suffix}"


def format_duration(duration_ns: int, samples: int) -> str:
    """Render a duration, with the sample count when benchmarked."""
    text = _format_rust_duration(int(duration_ns))
    if samples == 1:
        return f" ({text})"
    return f" ({text} @ {samples} samples)"


def format_result(result: Any, part: str, duration_str: str) -> str:
    """The exact text written for a part's result.

    An empty ``duration_str`` marks an intermediate line that is later
    overwritten in place by the final one.
    """
    intermediate = duration_str == ""

    if result is None:
        if intermediate:
            return f"{part}: ✖"
        return f"\r{part}: ✖             \n"

    text = str(result)
    if "\n" in text:
        line = f"{part}: ▼ {duration_str}"
        return line if intermediate else f"\r{line}\n{text}\n"

    line = f"{part}: {ANSI_BOLD}{text}{ANSI_RESET}{duration_str}"
    return line if intermediate else f"\r{line}\n"


def print_result(result: Any, part: str, duration_str: str) -> None:
    """Write a part's result to standard output."""
    sys.stdout.write(format_result(result, part, duration_str))
    sys.stdout.flush()


def bench(func: Callable[[Any], Any], data: Any, base_time_ns: int) -> tuple[int, int]:
    """Run ``func`` repeatedly; return the mean time in nanoseconds and the run count."""
    sys.stdout.write(f" > {ANSI_ITALIC}benching{ANSI_RESET}")
    sys.stdout.flush()

    iterations = ONE_SECOND_NS // max(int(base_time_ns), 10)
    iterations = min(max(iterations, MIN_BENCH_ITERATIONS), MAX_BENCH_ITERATIONS)

    total = 0
    for _ in range(iterations):
        start = time.perf_counter_ns()
        func(data)
        total += time.perf_counter_ns() - start

    return total // iterations, iterations


def run_timed(
    func: Callable[[Any], Any],
    data: Any,
    hook: Callable[[Any], None],
    timed: bool | None = None,
) -> tuple[Any, int, int]:
    """Run ``func`` once, then benchmark it if ``timed``.

    Returns the result, the duration in nanoseconds and the number of samples.
    ``timed`` defaults to whether ``--time`` is on the command line.
    """
    if timed is None:
        timed = "--time" in sys.argv

    start = time.perf_counter_ns()
    result = func(data)
    base_time = time.perf_counter_ns() - start

    hook(result)

    if timed:
        duration, samples = bench(func, data, base_time)
    else:
        duration, samples = base_time, 1
    return result, duration, samples


def _exit_usage() -> NoReturn:
    print(_SUBMIT_USAGE, file=sys.stderr)
    sys.exit(1)


def _parse_u8(text: str) -> int | None:
    if not _U8_PATTERN.fullmatch(text):
        return None
    value = int(text)
    return value if value <= 255 else None


def submit_result(
    result: Any, day: Day, part: int, argv: Sequence[str] | None = None
) -> subprocess.CompletedProcess | None:
    """Submit ``result`` if the command line asks for ``--submit <part>``.

    Returns None when nothing is submitted; exits with status 1 on a
    malformed command line or when the ``aoc`` client is missing.
    """
    args = list(sys.argv if argv is None else argv)

    if "--submit" not in args:
        return None
    if len(args) < 3:
        _exit_usage()

    index = args.index("--submit") + 1
    part_submit = _parse_u8(args[index]) if index < len(args) else None
    if part_submit is None:
        _exit_usage()

    if part_submit != part:
        return None

    try:
        aoc_cli.check()
    except aoc_cli.AocCommandError:
        print(_AOC_MISSING, file=sys.stderr)
        sys.exit(1)

    print("Submitting result via aoc-cli...")
    return aoc_cli.submit(day, part, str(result))


def run_part(
    func: Callable[[Any], Any],
    data: Any,
    day: Day,
    part: int,
    argv: Sequence[str] | None = None,
) -> Any:
    """Run, report and possibly submit one part of a solution; return its result."""
    args = list(sys.argv if argv is None else argv)
    part_str = f"Part {part}"

    result, duration, samples = run_timed(
        func,
        data,
        lambda value: print_result(value, part_str, ""),
        "--time" in args,
    )
    print_result(result, part_str, format_duration(duration, samples))

    if result is not None:
        # A failed submission is reported by the client itself.
        with suppress(aoc_cli.AocCommandError):
            submit_result(result, day, part, args)
    return result