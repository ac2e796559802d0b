"""Creating the project folder for a new year from the year template."""

from __future__ import annotations

import shutil
import sys
from pathlib import Path
from typing import NoReturn

from adventkit.commands import set_year
from adventkit.config import WriteError, WriteStage, write_file

YEAR_NUMBER_FILES = (
    "Cargo.toml",
    "src/main.rs",
    "src/template/aoc_cli.rs",
    "src/template/run_multi.rs",
    "src/template/template.txt",
    "src/template/commands/scaffold.rs",
    ".cargo/config.toml",
)

TEMPLATE_DIR = "year_template"
MEMBERS_START = "members = ["


def replace_year_numbers(text: str, year: int, filename: str) -> str:
    """Fill ``year`` into a template file's placeholders.

    Scaffold sources keep the bare placeholder, which they fill in later.
    """
    text = text.replace("%YEAR_NUMBER%", str(year))
    if "scaffold" not in filename:
        text = text.replace("YEAR_NUMBER", str(year))
    return text


def add_year_to_toml(year: int, original: str) -> str:
    """Append ``year`` to the workspace members list of a Cargo manifest."""
    start = original.find(MEMBERS_START)
    if start == -1:
        raise ValueError("Failed to find a members section of Cargo.toml.")
    end = original.find("]", start)
    if end == -1:
        raise ValueError("Failed to find the end of the members section of Cargo.toml.")
    return f'{original[:end]}, "{year}"{original[end:]}'


def set_year_numbers(year: int, new_root: str | Path) -> None:
    """Fill ``year`` into every templated file below ``new_root``.

    Raises OSError when a file cannot be read and WriteError when it cannot
    be written.
    """
    base = Path(new_root)
    for filename in YEAR_NUMBER_FILES:
        path = base / filename
        try:
            original = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise OSError(
                f"Could not read from file {path} to set year numbers."
            ) from exc
        write_file(path, replace_year_numbers(original, year, filename))


def _abort(message: str, new_root: Path) -> NoReturn:
    print(message, file=sys.stderr)
    shutil.rmtree(new_root, ignore_errors=True)
    sys.exit(1)


def _add_to_workspace(year: int, root: Path, new_root: Path) -> None:
    manifest = root / "Cargo.toml"
    try:
        original = manifest.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        _abort("Failed to read Cargo.toml.", new_root)
    try:
        updated = add_year_to_toml(year, original)
    except ValueError as exc:
        _abort(str(exc), new_root)
    try:
        write_file(manifest, updated)
    except WriteError as exc:
        print(exc, file=sys.stderr)
        if exc.stage is WriteStage.WRITE:
            shutil.rmtree(new_root, ignore_errors=True)
            write_file(manifest, original)
            sys.exit(1)


def handle_new_year(year: int, root: str | Path | None = None) -> None:
    """Create the ``year`` project from the template and make it the working year."""
    base = Path.cwd() if root is None else Path(root)
    template_root = base / TEMPLATE_DIR
    new_root = base / str(year)

    if new_root.exists():
        print(f"{year} directory already exists", file=sys.stderr)
        sys.exit(1)

    try:
        shutil.copytree(template_root, new_root)
    except OSError as exc:
        _abort(f"Failed to copy the year template: {exc}", new_root)

    try:
        set_year_numbers(year, new_root)
    except (OSError, WriteError) as exc:
        _abort(str(exc), new_root)

    try:
        set_year(year, base)
    except WriteError as exc:
        print(exc, file=sys.stderr)
        _abort("Failed to write the new year to config.toml.", new_root)
    except (OSError, UnicodeDecodeError):
        _abort("Failed to read config.toml.", new_root)

    _add_to_workspace(year, base, new_root)

    print(f"Created {year} workspace project.")
    print(f"Set the repository's current working year to {year}.")
    print("---")
    print("🎄 Type `cargo scaffold <day>` to get started on the year.")
    print("🎄 Or type `cargo set-year <year>` to switch to working on a different year.")