# adventkit

A command-line companion for an Advent of Code workspace that holds one
project per year. It scaffolds daily solution files, runs and benchmarks
them through `cargo`, keeps a benchmark table in `README.md` up to date, and
calls the `aoc` command-line client to download inputs, read puzzle
descriptions and submit answers.

## Installation

```
pip install .
```

This installs the `adventkit` command. Running, testing and timing
solutions start `cargo`; downloading, reading and submitting start `aoc`.
Both must be on your `PATH` for those commands to work.

## Choosing a year

Every command that needs a year takes it from the `AOC_YEAR` environment
variable if it is set, and otherwise from the `AOC_YEAR = "2023"` line of
`.cargo/config.toml` in the current directory. If no year can be found, the
command prints `Failed to get the currently set year.` and exits with
status 1.

```
adventkit new-year 2023     # copy year_template/ to 2023/, fill in the year, select it
adventkit set-year 2022     # rewrite the AOC_YEAR line of .cargo/config.toml
adventkit get-year          # print the selected year
```

`new-year` refuses to run if the year's folder already exists. It replaces
the year placeholders in the copied project files, sets the year in
`.cargo/config.toml` and appends the year to the `members = [...]` list of
the top-level `Cargo.toml`. If a step fails, the new folder is removed.

## Daily workflow

```
adventkit scaffold 1 --download   # create the solution, input and example files, then fetch input and puzzle
adventkit read 1                  # print the puzzle description
adventkit solve 1                 # cargo run -p advent_of_code_<year> --bin 01 --
adventkit solve 1 --release --submit 1   # run optimised and submit part 1
adventkit try 1                   # cargo test -p advent_of_code_<year> --bin 01 --
adventkit try 1 part_one          # run one named test
adventkit today                   # scaffold, download and read today's puzzle
```

`scaffold` fills `src/template/template.txt` (read from the current
directory) with the year and day number and writes it to
`<year>/src/bin/<day>.rs`, then creates empty `<year>/data/inputs/<day>.txt`
and `<year>/data/examples/<day>.txt`. It refuses to replace an existing
solution file unless given `--overwrite`. `solve` and `try` accept `--dhat`
to build with the `dhat` profile and the `dhat-heap` feature (for `solve` it
takes the place of `--release`; for `try` it takes the place of a test
name). `today` only works from the 1st to the 25th of December, judged in
UTC−5.

Days are numbered 1 to 25 and shown as two digits, e.g. `01`. Downloads go
to `<year>/data/inputs/<day>.txt` and `<year>/data/puzzles/<day>.md`.

## Running and timing everything

```
adventkit all                 # run every scaffolded day
adventkit all --release
adventkit time                # benchmark days that are not yet fully benchmarked
adventkit time 4              # benchmark a single day
adventkit time --all --store  # benchmark every day and record the results
```

Days without a `<year>/src/bin/<day>.rs` file are reported as
`Not solved.` and skipped. Timing runs each solution in release mode with
`--time` and reads the `Part N: ... (<time> @ <n> samples)` lines it prints.
With `--store`, the results are merged into `data/timings.json` and the
table between the two `<!--- benchmarking table --->` markers in
`README.md` is rewritten; the README must contain one or two markers.

## Using it from Python

The modules can also be used directly:

- `adventkit.day`: `Day` (a validated day number, `Day.parse("08")`,
  `Day.today()`) and `all_days()`.
- `adventkit.timings`: `Timing` and `Timings`, with JSON encoding,
  `merge`, `total_millis` and `is_day_complete`.
- `adventkit.benchmarks`: `update_content` and `update` for the README
  table.
- `adventkit.runner`: `run_part(func, data, day, part)` runs one part of a
  solution, prints its result, benchmarks it when `--time` is on the
  command line and submits it when `--submit <part>` is.
- `adventkit.config`: `get_year`, `read_file` and `read_file_part` for
  reading `data/<folder>/<day>.txt` files.

## What it does not do

adventkit does not compile or run solutions itself: it starts `cargo` for
that, and relies on each year's project to print its results in the format
above. It does not talk to the Advent of Code website directly; all
downloading and submitting goes through the `aoc` client. It ships no
solution template; `scaffold` expects `src/template/template.txt` and
`new-year` expects a `year_template/` folder in the current directory.