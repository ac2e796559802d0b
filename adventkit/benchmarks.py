"""Keeping a benchmark table in the README up to date."""

from __future__ import annotations

from pathlib import Path

from adventkit.day import Day
from adventkit.timings import Timings

MARKER = "<!--- benchmarking table --->"
README_PATH = "README.md"


class ReadmeError(Exception):
    """Raised when the README cannot be read, parsed or written."""


def get_path_for_bin(day: Day, year: int | None = None) -> str:
    """Relative link to the solution file of ``day``."""
    if year is None:
        return f"./src/bin/{day}.rs"
    return f"./{year}/src/bin/{day}.rs"


def locate_table(readme: str) -> tuple[int, int]:
    """Start and end offsets of the marked benchmark table."""
    positions = []
    start = readme.find(MARKER)
    while start != -1:
        positions.append(start)
        start = readme.find(MARKER, start + len(MARKER))

    if len(positions) > 2:
        raise ReadmeError("too many occurences of marker in README.")
    if not positions:
        raise ReadmeError("Could not find table start position.")
    return positions[0], positions[-1] + len(MARKER)


def construct_table(
    prefix: str, timings: Timings, total_millis: float, year: int | None = None
) -> str:
    """Render the benchmark table, markers included."""
    lines = [
        MARKER,
        f"{prefix} Benchmarks",
        "",
        "| Day | Part 1 | Part 2 |",
        "| :---: | :---: | :---:  |",
    ]
    lines.extend(
        f"| [Day {timing.day.value}]({get_path_for_bin(timing.day, year)}) "
        f"| `{timing.part_1 if timing.part_1 is not None else '-'}` "
        f"| `{timing.part_2 if timing.part_2 is not None else '-'}` |"
        for timing in timings.data
    )
    lines.extend(["", f"**Total: {total_millis:.2f}ms**", MARKER])
    return "\n".join(lines)


def update_content(
    text: str, timings: Timings, total_millis: float, year: int | None = None
) -> str:
    """Return ``text`` with its benchmark table replaced."""
    start, end = locate_table(text)
    table = construct_table("##", timings, total_millis, year)
    return text[:start] + table + text[end:]


def update(timings: Timings, path: str | Path = README_PATH, year: int | None = None) -> None:
    """Rewrite the benchmark table of the README at ``path``."""
    readme_path = Path(path)
    try:
        text = readme_path.read_bytes().decode("utf-8", errors="replace")
    except OSError as exc:
        raise ReadmeError(f"could not read {readme_path}: {exc}") from exc
    new_text = update_content(text, timings, timings.total_millis(), year)
    try:
        readme_path.write_text(new_text, encoding="utf-8")
    except OSError as exc:
        raise ReadmeError(f"could not write {readme_path}: {exc}") from exc