# atcoder-tool

A small set of commands for working on AtCoder contests from the terminal.
It creates a directory per contest and problem, downloads the sample cases
from a problem page, and runs your solution against them.

## Installation

```
pip install .
```

This installs the `atcoder-tool` command.

## Commands

```
atcoder-tool [command] [flags] [arguments]
```

| Command    | Alias | What it does                                           |
|------------|-------|--------------------------------------------------------|
| `login`    | `l`   | Saves your AtCoder session cookie locally              |
| `init`     | `i`   | Creates the directory layout for a contest             |
| `download` | `d`   | Downloads the sample cases of the current problem      |
| `test`     | `t`   | Builds and runs your solution against the samples      |

Every command accepts `-h` / `-help` to show its usage, and `-v` /
`-verbose` to turn on debug logging (a double dash, as in `--help`, works
too). Flags come before other arguments. Running `atcoder-tool` with no
command, or with `-h`, prints the usage and exits with status 1; in that
text the tool calls itself `atcoder-cli`.

Log messages are written to standard error in the form
`level=ERROR msg=...`.

### login

```
atcoder-tool login
```

Log in to AtCoder in your browser, copy the value of the `REVEL_SESSION`
cookie and paste it when asked. It is stored as `REVEL_SESSION=<value>` in
`$XDG_DATA_HOME/atcoder-cli/cookie.txt`, or
`~/.local/share/atcoder-cli/cookie.txt` when `XDG_DATA_HOME` is not set,
with permissions `0600`. The command then checks that the stored cookie
opens a submission page without being redirected. If you are already
logged in, nothing is asked.

### init

```
atcoder-tool init abc100
```

Reads the task list of the contest and creates `abc100/` with one
sub-directory per problem (ids lower-cased, each once), for example
`abc100/a`, `abc100/b`, ... Directories that already exist are left alone.

### download

```
cd abc100/a
atcoder-tool download
```

The contest and problem are taken from the names of the current directory
and its parent. The samples are written, with surrounding whitespace
removed, to `test/1.in`, `test/1.out`, `test/2.in`, ...

### test

```
cd abc100/a
atcoder-tool test
```

Detects the language from the first main file found in the current
directory (in the order of the table below), builds it if needed, feeds
each `test/*.in` to the program in name order and compares its trimmed
output with the matching `.out` file. Afterwards the built program is
removed.

| Language | Main file  | Build                         | Run              |
|----------|------------|-------------------------------|------------------|
| go       | `main.go`  | `go build -o main main.go`    | `./main`         |
| cpp      | `main.cpp` | `g++ -o main main.cpp`        | `./main`         |
| python   | `main.py`  | —                             | `python3 main.py`|
| zig      | `main.zig` | `zig build main.zig`          | `./main`         |

Results are printed on standard error; a failing case shows its input, the
expected output and what the program printed. The exit status is 1 when
something goes wrong (no samples, no main file, a build that fails, a
program that exits with a non-zero status), not when a case merely gives a
wrong answer.

## Use from Python

The pieces behind the commands can be used directly:

- `atcoder_tool.workspace.Workspace(root=...)` — a problem directory: its
  test files, the cookie file and the streams used for output.
- `atcoder_tool.atcoder.AtCoder(workspace)` — `login_check()`,
  `test_cases(contest, problem)` and `problem_ids(contest)`;
  `parse_test_cases(html, workspace)` and `parse_problem_ids(html)` work on
  page text alone.
- `atcoder_tool.testcase.TestCases` — `write()`, `run(language)`,
  `report()` and `run_and_report(language)`.
- `atcoder_tool.language.find_language(name)` — one of the languages above.
- `atcoder_tool.cli.main(argv)` — the command itself.

## What it does not do

There is no command for submitting solutions: the stored cookie is used
only to check the login and to fetch pages.

## Development

```
pip install -e ".[test]"
pytest
```