import pytest

from adventkit.cli import main, parse_args
from adventkit.day import Day


def test_all_with_release():
    parsed = parse_args(["all", "--release"])
    assert parsed.command == "all"
    assert parsed.release is True


def test_all_without_release():
    assert parse_args(["all"]).release is False


def test_time_flags_and_day():
    parsed = parse_args(["time", "--all", "--store", "7"])
    assert parsed.command == "time"
    assert parsed.run_all is True
    assert parsed.store is True
    assert parsed.day == Day(7)


def test_time_without_day():
    parsed = parse_args(["time"])
    assert parsed.day is None
    assert parsed.run_all is False
    assert parsed.store is False


@pytest.mark.parametrize("command", ["download", "read"])
def test_day_commands(command):
    parsed = parse_args([command, "3"])
    assert parsed.command == command
    assert parsed.day == Day(3)


def test_scaffold_flags():
    parsed = parse_args(["scaffold", "12", "--download", "--overwrite"])
    assert parsed.day == Day(12)
    assert parsed.download is True
    assert parsed.overwrite is True


def test_solve_with_submit():
    parsed = parse_args(["solve", "1", "--release", "--submit", "2"])
    assert parsed.day == Day(1)
    assert parsed.release is True
    assert parsed.submit == 2
    assert parsed.dhat is False


def test_solve_with_submit_equals_form():
    assert parse_args(["solve", "1", "--submit=1"]).submit == 1


def test_solve_submit_without_value_is_error():
    with pytest.raises(ValueError):
        parse_args(["solve", "1", "--submit"])


def test_solve_submit_not_a_number_is_error():
    with pytest.raises(ValueError):
        parse_args(["solve", "1", "--submit", "x"])


def test_try_with_test_name():
    parsed = parse_args(["try", "5", "test_part_one"])
    assert parsed.day == Day(5)
    assert parsed.test == "test_part_one"
    assert parsed.dhat is False


def test_try_with_dhat_and_no_test():
    parsed = parse_args(["try", "5", "--dhat"])
    assert parsed.test is None
    assert parsed.dhat is True


@pytest.mark.parametrize("command", ["new-year", "set-year"])
def test_year_commands(command):
    parsed = parse_args([command, "2023"])
    assert parsed.command == command
    assert parsed.year == 2023


def test_year_must_be_a_number():
    with pytest.raises(ValueError):
        parse_args(["set-year", "soon"])


@pytest.mark.parametrize("bad_day", ["0", "26", "abc"])
def test_invalid_day_is_error(bad_day):
    with pytest.raises(ValueError):
        parse_args(["download", bad_day])


def test_missing_day_is_error():
    with pytest.raises(ValueError):
        parse_args(["read"])


def test_unknown_command_is_error():
    with pytest.raises(ValueError, match="Unknown command: bogus"):
        parse_args(["bogus"])


def test_no_command_is_error():
    with pytest.raises(ValueError, match="No command specified."):
        parse_args([])


def test_unknown_arguments_warn(capsys):
    parsed = parse_args(["get-year", "extra"])
    assert parsed.command == "get-year"
    assert "Warning: unknown argument(s)" in capsys.readouterr().err


def test_main_unknown_command_exits(capsys):
    with pytest.raises(SystemExit) as info:
        main(["bogus"])
    assert info.value.code == 1
    assert "Unknown command: bogus" in capsys.readouterr().err


def test_main_no_command_exits(capsys):
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 1
    assert "No command specified." in capsys.readouterr().err


def test_main_bad_argument_reports_error(capsys):
    with pytest.raises(SystemExit) as info:
        main(["read", "99"])
    assert info.value.code == 1
    assert capsys.readouterr().err.startswith("Error: ")


def test_main_get_year(monkeypatch, capsys):
    monkeypatch.setenv("AOC_YEAR", "2023")
    assert main(["get-year"]) == 0
    assert capsys.readouterr().out == "The repository is currently set to 2023.\n"


def test_main_get_year_unset_exits(monkeypatch, tmp_path):
    monkeypatch.delenv("AOC_YEAR", raising=False)
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as info:
        main(["get-year"])
    assert info.value.code == 1


def test_main_set_year_updates_config(monkeypatch, tmp_path, capsys):
    monkeypatch.chdir(tmp_path)
    config = tmp_path / ".cargo" / "config.toml"
    config.parent.mkdir()
    config.write_text('[env]\nAOC_YEAR = "2022"\n', encoding="utf-8")

    assert main(["set-year", "2024"]) == 0
    assert 'AOC_YEAR = "2024"' in config.read_text(encoding="utf-8")
    assert "Set repository to year 2024." in capsys.readouterr().out