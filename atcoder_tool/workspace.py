"""The working directory: its files, streams, logger and stored login cookie."""

from __future__ import annotations

import enum
import logging
import os
import subprocess
import sys
from pathlib import Path
from typing import Callable, List, Mapping, Optional, Sequence, TextIO, Tuple

from .language import LANGUAGES, Language
from .testcase import TestCase, TestCases

CommandRunner = Callable[[List[str], Optional[str], TextIO, TextIO], None]

COOKIE_NAME = "REVEL_SESSION"
COOKIE_PROMPT = "REVEL_SESSION cookie を入力してください: "


class LogLevel(enum.IntEnum):
    """Log levels understood by :meth:`Workspace.set_log_level`."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARN = logging.WARNING
    ERROR = logging.ERROR


class WorkspaceError(Exception):
    """Raised when the workspace cannot do what was asked of it."""


def _home_dir() -> str:
    try:
        return str(Path.home())
    except RuntimeError:
        return ""


def default_cookie_path(
    environ: Optional[Mapping[str, str]] = None, home: Optional[str] = None
) -> str:
    """Where the login cookie is kept: under XDG_DATA_HOME or ~/.local/share."""
    if environ is None:
        environ = os.environ
    data_home = environ.get("XDG_DATA_HOME", "")
    if not data_home:
        if home is None:
            home = _home_dir()
        data_home = os.path.join(home, ".local", "share")
    return os.path.join(data_home, "atcoder-cli", "cookie.txt")


class Workspace:
    """A problem directory together with the streams and tools used on it."""

    def __init__(
        self,
        root=None,
        test_dir: str = "test",
        cookie_path: Optional[str] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        logger: Optional[logging.Logger] = None,
        run_command: Optional[CommandRunner] = None,
    ):
        self.root = Path(root) if root is not None else None
        self.test_dir = test_dir
        self.cookie_path = cookie_path if cookie_path is not None else default_cookie_path()
        self._stdin = stdin
        self._stdout = stdout
        self._stderr = stderr
        self.logger = logger if logger is not None else logging.getLogger("atcoder_tool")
        self._run_command = run_command if run_command is not None else self._run_process

    @property
    def cwd(self) -> Path:
        """The directory the workspace works in."""
        return self.root if self.root is not None else Path.cwd()

    @property
    def stdin(self) -> TextIO:
        return self._stdin if self._stdin is not None else sys.stdin

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr if self._stderr is not None else sys.stderr

    def _path(self, path) -> Path:
        return self.cwd / path

    def set_log_level(self, level: LogLevel) -> None:
        """Set the lowest level the logger lets through."""
        self.logger.setLevel(int(level))

    def print_err(self, *args) -> None:
        """Print a line to the error stream."""
        print(*args, file=self.stderr)

    def make_dir(self, path) -> None:
        """Create one directory; an existing one is fine."""
        try:
            self._path(path).mkdir(mode=0o755)
        except FileExistsError:
            pass

    def make_dirs(self, path) -> None:
        """Create a directory and its missing parents."""
        self._path(path).mkdir(mode=0o755, parents=True, exist_ok=True)

    def exists(self, path) -> bool:
        return self._path(path).exists()

    def read_file(self, path) -> str:
        return self._path(path).read_text(encoding="utf-8")

    def write_file(self, path, data: str, mode: int = 0o644) -> None:
        """Write ``data`` to ``path``, creating it with permissions ``mode``."""
        fd = os.open(self._path(path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(data)

    def contest_and_problem(self) -> Tuple[str, str]:
        """Contest and problem named by the last two parts of the directory."""
        cwd = self.cwd
        problem = cwd.name
        contest = cwd.parent.name
        if not problem or not contest:
            raise WorkspaceError("no contest or problem found")
        return contest, problem

    def detect_language(self) -> Language:
        """The first known language whose main file is present."""
        for language in LANGUAGES:
            if self.exists(language.main_file):
                return language
        raise WorkspaceError("mainファイルが見つかりません。")

    def has_test_cases(self) -> bool:
        """Whether the test directory holds any ``.in`` file."""
        if not self.exists(self.test_dir):
            return False
        try:
            names = os.listdir(self._path(self.test_dir))
        except OSError as exc:
            self.print_err(exc)
            return False
        return any(name.endswith(".in") for name in names)

    def make_test_dir(self) -> None:
        self.make_dir(self.test_dir)

    def fetch_test_cases(self) -> TestCases:
        """Test cases for every ``.in`` file in the test directory, by name."""
        names = sorted(os.listdir(self._path(self.test_dir)))
        cases = TestCases()
        for name in names:
            if name.endswith(".in"):
                cases.add(TestCase(self, name[: -len(".in")]))
        return cases

    def load_cookies(self) -> List[Tuple[str, str]]:
        """Name and value of each ``name=value`` line of the cookie file."""
        if not self.exists(self.cookie_path):
            return []
        cookies = []
        for line in self.read_file(self.cookie_path).split("\n"):
            name, separator, value = line.partition("=")
            if separator and name:
                cookies.append((name, value))
        return cookies

    def save_cookie(self, cookie: str) -> None:
        """Store ``cookie`` as the only line of the cookie file."""
        self.make_dirs(os.path.dirname(self.cookie_path))
        self.write_file(self.cookie_path, cookie + "\n", 0o600)

    def prompt_cookie(self) -> str:
        """Ask for the session cookie value and return it as ``name=value``."""
        self.print_err(COOKIE_PROMPT)
        line = self.stdin.readline()
        if not line.endswith("\n"):
            raise WorkspaceError("input ended before the cookie was entered")
        return f"{COOKIE_NAME}={line.strip()}"

    def run(self, cmd: Sequence[str], stdin: Optional[str] = None, stdout=None, stderr=None) -> None:
        """Run ``cmd`` in the workspace; an empty command does nothing."""
        if not cmd:
            return
        self._run_command(
            list(cmd),
            stdin,
            stdout if stdout is not None else self.stdout,
            stderr if stderr is not None else self.stderr,
        )

    def _run_process(self, cmd: List[str], stdin: Optional[str], stdout: TextIO, stderr: TextIO) -> None:
        options = {"input": stdin} if stdin is not None else {"stdin": subprocess.DEVNULL}
        try:
            completed = subprocess.run(
                cmd, capture_output=True, text=True, cwd=self.cwd, check=False, **options
            )
        except OSError as exc:
            raise WorkspaceError(f"cannot start {cmd[0]}: {exc}") from exc
        stdout.write(completed.stdout)
        stderr.write(completed.stderr)
        if completed.returncode != 0:
            raise WorkspaceError(f"{' '.join(cmd)}: exit status {completed.returncode}")