from pathlib import Path

import pytest

from adventkit.config import (
    WriteError,
    WriteStage,
    config_path,
    get_year,
    get_year_or_exit,
    read_file,
    read_file_part,
    write_file,
    year_from_config,
)
from adventkit.day import Day


def test_get_year_from_environment(monkeypatch):
    monkeypatch.setenv("AOC_YEAR", "2023")
    assert get_year() == 2023


def test_get_year_rejects_garbage(monkeypatch):
    monkeypatch.setenv("AOC_YEAR", "abc")
    assert get_year() is None


def test_get_year_rejects_negative(monkeypatch):
    monkeypatch.setenv("AOC_YEAR", "-2023")
    assert get_year() is None


def test_get_year_falls_back_to_config(monkeypatch, tmp_path):
    monkeypatch.delenv("AOC_YEAR", raising=False)
    monkeypatch.chdir(tmp_path)
    path = config_path(tmp_path)
    path.parent.mkdir()
    path.write_text('[env]\nAOC_YEAR = "2021"\n', encoding="utf-8")
    assert get_year() == 2021


def test_get_year_without_any_source(monkeypatch, tmp_path):
    monkeypatch.delenv("AOC_YEAR", raising=False)
    monkeypatch.chdir(tmp_path)
    assert get_year() is None


def test_get_year_or_exit_exits(monkeypatch, tmp_path, capsys):
    monkeypatch.delenv("AOC_YEAR", raising=False)
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as info:
        get_year_or_exit()
    assert info.value.code == 1
    assert "Failed to get the currently set year." in capsys.readouterr().err


def test_get_year_or_exit_returns_year(monkeypatch):
    monkeypatch.setenv("AOC_YEAR", "2019")
    assert get_year_or_exit() == 2019


def test_year_from_config_reads_quoted_value():
    text = '[env]\nOTHER = "x"\nAOC_YEAR = "2022"\n'
    assert year_from_config(text) == 2022


def test_year_from_config_without_quotes():
    assert year_from_config("AOC_YEAR = 2022\n") is None


def test_year_from_config_without_line():
    assert year_from_config('[env]\nOTHER = "1999"\n') is None


def test_config_path_layout(tmp_path):
    assert config_path(tmp_path) == tmp_path / ".cargo" / "config.toml"


def test_read_file_round_trip(tmp_path):
    folder = tmp_path / "data" / "inputs"
    folder.mkdir(parents=True)
    (folder / f"{Day(3)}.txt").write_text("hello\n", encoding="utf-8")
    assert read_file("inputs", Day(3), tmp_path) == "hello\n"


def test_read_file_part_round_trip(tmp_path):
    folder = tmp_path / "data" / "examples"
    folder.mkdir(parents=True)
    (folder / f"{Day(12)}-2.txt").write_text("part two", encoding="utf-8")
    assert read_file_part("examples", Day(12), 2, tmp_path) == "part two"


def test_read_file_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_file("inputs", Day(1), tmp_path)


def test_write_file_truncates_existing(tmp_path):
    target = tmp_path / "file.txt"
    target.write_text("a much longer original text", encoding="utf-8")
    write_file(target, b"short")
    assert target.read_bytes() == b"short"


def test_write_file_accepts_text(tmp_path):
    target = tmp_path / "file.txt"
    target.write_text("", encoding="utf-8")
    write_file(target, "text content")
    assert target.read_text(encoding="utf-8") == "text content"


def test_write_file_does_not_create(tmp_path):
    target = tmp_path / "missing.txt"
    with pytest.raises(WriteError) as info:
        write_file(target, b"data")
    assert info.value.stage is WriteStage.OPEN
    assert not Path(target).exists()