import io
import logging
import os
import sys

import pytest

from atcoder_tool.workspace import (
    LogLevel,
    Workspace,
    WorkspaceError,
    default_cookie_path,
)


def _workspace(root, **kwargs):
    options = {
        "cookie_path": str(root / "data" / "atcoder-cli" / "cookie.txt"),
        "stdin": io.StringIO(),
        "stdout": io.StringIO(),
        "stderr": io.StringIO(),
        "logger": logging.getLogger("atcoder_tool.tests.workspace"),
    }
    options.update(kwargs)
    return Workspace(root=root, **options)


def test_contest_and_problem(tmp_path):
    ws = _workspace(tmp_path / "path" / "to" / "abc100" / "a")
    assert ws.contest_and_problem() == ("abc100", "a")


@pytest.mark.parametrize("root", ["/", "/abc200"])
def test_contest_and_problem_missing(root, tmp_path):
    ws = _workspace(tmp_path, root=root) if False else Workspace(
        root=root, cookie_path=str(tmp_path / "cookie.txt"), stderr=io.StringIO()
    )
    with pytest.raises(WorkspaceError, match="no contest or problem found"):
        ws.contest_and_problem()


@pytest.mark.parametrize(
    "main_file, name",
    [("main.go", "go"), ("main.cpp", "cpp"), ("main.py", "python"), ("main.zig", "zig")],
)
def test_detect_language(tmp_path, main_file, name):
    (tmp_path / main_file).write_text("")
    assert _workspace(tmp_path).detect_language().name == name


def test_detect_language_prefers_earlier_entry(tmp_path):
    (tmp_path / "main.py").write_text("")
    (tmp_path / "main.go").write_text("")
    assert _workspace(tmp_path).detect_language().name == "go"


def test_detect_language_none_found(tmp_path):
    with pytest.raises(WorkspaceError, match="mainファイルが見つかりません"):
        _workspace(tmp_path).detect_language()


def test_fetch_test_cases(tmp_path):
    test_dir = tmp_path / "test"
    test_dir.mkdir()
    for name in ["1.in", "1.out", "2.in", "sample-3.in", "other.txt"]:
        (test_dir / name).write_text("x")
    cases = _workspace(tmp_path).fetch_test_cases()
    assert [case.name for case in cases] == ["1", "2", "sample-3"]


def test_fetch_test_cases_without_inputs(tmp_path):
    test_dir = tmp_path / "test"
    test_dir.mkdir()
    (test_dir / "1.out").write_text("x")
    (test_dir / "other.txt").write_text("x")
    assert list(_workspace(tmp_path).fetch_test_cases()) == []


def test_fetch_test_cases_empty_dir(tmp_path):
    (tmp_path / "test").mkdir()
    assert len(_workspace(tmp_path).fetch_test_cases()) == 0


def test_fetch_test_cases_missing_dir(tmp_path):
    with pytest.raises(OSError):
        _workspace(tmp_path).fetch_test_cases()


def test_has_test_cases(tmp_path):
    ws = _workspace(tmp_path)
    assert ws.has_test_cases() is False
    ws.make_test_dir()
    (tmp_path / "test" / "1.out").write_text("x")
    assert ws.has_test_cases() is False
    (tmp_path / "test" / "1.in").write_text("x")
    assert ws.has_test_cases() is True


def _cookie_workspace(tmp_path, content):
    path = tmp_path / "cookie.txt"
    if content is not None:
        path.write_text(content)
    return _workspace(tmp_path, cookie_path=str(path))


@pytest.mark.parametrize(
    "content, expected",
    [
        (
            "REVEL_SESSION=session_value\nANOTHER_COOKIE=another_value\n",
            [("REVEL_SESSION", "session_value"), ("ANOTHER_COOKIE", "another_value")],
        ),
        ("", []),
        ("KEY=VALUE\n", [("KEY", "VALUE")]),
        (None, []),
        (
            "VALID=1\nINVALID_LINE\n=ONLY_VALUE\nKEY_ONLY=\nVALID2=2\n",
            [("VALID", "1"), ("KEY_ONLY", ""), ("VALID2", "2")],
        ),
    ],
)
def test_load_cookies(tmp_path, content, expected):
    assert _cookie_workspace(tmp_path, content).load_cookies() == expected


def test_load_cookies_read_error(tmp_path):
    cookie_dir = tmp_path / "cookie.txt"
    cookie_dir.mkdir()
    ws = _workspace(tmp_path, cookie_path=str(cookie_dir))
    with pytest.raises(OSError):
        ws.load_cookies()


def test_save_cookie_creates_parents(tmp_path):
    ws = _workspace(tmp_path)
    ws.save_cookie("REVEL_SESSION=test_value")
    path = tmp_path / "data" / "atcoder-cli" / "cookie.txt"
    assert path.read_text() == "REVEL_SESSION=test_value\n"
    assert ws.load_cookies() == [("REVEL_SESSION", "test_value")]


def test_save_cookie_directory_error(tmp_path):
    (tmp_path / "blocker").write_text("not a directory")
    ws = _workspace(tmp_path, cookie_path=str(tmp_path / "blocker" / "sub" / "cookie.txt"))
    with pytest.raises(OSError):
        ws.save_cookie("REVEL_SESSION=test_value")


PROMPT_OUTPUT = "REVEL_SESSION cookie を入力してください: \n"


@pytest.mark.parametrize(
    "typed, expected",
    [
        ("my_revel_session_value\n", "REVEL_SESSION=my_revel_session_value"),
        ("  spaced_value  \n", "REVEL_SESSION=spaced_value"),
        ("\n", "REVEL_SESSION="),
    ],
)
def test_prompt_cookie(tmp_path, typed, expected):
    errors = io.StringIO()
    ws = _workspace(tmp_path, stdin=io.StringIO(typed), stderr=errors)
    assert ws.prompt_cookie() == expected
    assert errors.getvalue() == PROMPT_OUTPUT


def test_prompt_cookie_input_ends_early(tmp_path):
    errors = io.StringIO()
    ws = _workspace(tmp_path, stdin=io.StringIO("some input"), stderr=errors)
    with pytest.raises(WorkspaceError):
        ws.prompt_cookie()
    assert errors.getvalue() == PROMPT_OUTPUT


def test_default_cookie_path_xdg():
    path = default_cookie_path({"XDG_DATA_HOME": "/xdg/data"}, "/user/home")
    assert path == "/xdg/data/atcoder-cli/cookie.txt"


def test_default_cookie_path_home():
    path = default_cookie_path({"XDG_DATA_HOME": ""}, "/user/home")
    assert path == "/user/home/.local/share/atcoder-cli/cookie.txt"


def test_default_cookie_path_no_home():
    path = default_cookie_path({}, "")
    assert path == os.path.join(".local", "share", "atcoder-cli", "cookie.txt")


def test_make_dir_is_idempotent(tmp_path):
    ws = _workspace(tmp_path)
    ws.make_dir("abc100")
    ws.make_dir("abc100")
    assert (tmp_path / "abc100").is_dir()


def test_make_dir_needs_parent(tmp_path):
    with pytest.raises(FileNotFoundError):
        _workspace(tmp_path).make_dir(os.path.join("missing", "child"))


def test_write_and_read_file(tmp_path):
    ws = _workspace(tmp_path)
    ws.write_file("note.txt", "hello\n", 0o644)
    assert ws.exists("note.txt") is True
    assert ws.read_file("note.txt") == "hello\n"


def test_print_err_joins_with_spaces(tmp_path):
    errors = io.StringIO()
    _workspace(tmp_path, stderr=errors).print_err("a", 1)
    assert errors.getvalue() == "a 1\n"


def test_set_log_level(tmp_path):
    logger = logging.getLogger("atcoder_tool.tests.level")
    ws = _workspace(tmp_path, logger=logger)
    ws.set_log_level(LogLevel.DEBUG)
    assert logger.level == logging.DEBUG
    ws.set_log_level(LogLevel.INFO)
    assert logger.level == logging.INFO


def test_run_real_process(tmp_path):
    out = io.StringIO()
    err = io.StringIO()
    ws = _workspace(tmp_path)
    script = "import sys; sys.stdout.write(sys.stdin.read().upper()); sys.stderr.write('log')"
    ws.run([sys.executable, "-c", script], "abc", out, err)
    assert out.getvalue() == "ABC"
    assert err.getvalue() == "log"


def test_run_failing_process(tmp_path):
    ws = _workspace(tmp_path)
    with pytest.raises(WorkspaceError, match="exit status 3"):
        ws.run([sys.executable, "-c", "import sys; sys.exit(3)"])


def test_run_missing_program(tmp_path):
    with pytest.raises(WorkspaceError, match="cannot start"):
        _workspace(tmp_path).run(["atcoder-tool-no-such-program"])


def test_run_empty_command_is_noop(tmp_path):
    calls = []
    ws = _workspace(tmp_path, run_command=lambda *args: calls.append(args))
    ws.run(())
    assert calls == []


def test_run_uses_default_streams(tmp_path):
    calls = []
    out = io.StringIO()
    err = io.StringIO()
    ws = _workspace(tmp_path, stdout=out, stderr=err, run_command=lambda *args: calls.append(args))
    ws.run(("mock", "build"))
    assert calls == [(["mock", "build"], None, out, err)]