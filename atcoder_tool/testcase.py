"""Sample test cases: their files, running a solution on them, and reports."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, Optional, Tuple

if TYPE_CHECKING:
    from .language import Language
    from .workspace import Workspace


class TestCaseError(Exception):
    """Raised when a test case lacks the data an operation needs."""

    __test__ = False


class TestCase:
    """One sample: its input, the expected output and the solution's output."""

    __test__ = False

    def __init__(
        self,
        workspace: "Workspace",
        name: str = "",
        input: Optional[str] = None,
        want: Optional[str] = None,
    ):
        self.workspace = workspace
        self.name = name
        self._input = input
        self._want = want
        self._got: Optional[str] = None

    def __repr__(self) -> str:
        return f"TestCase(name={self.name!r})"

    def input_path(self) -> str:
        return f"{self.workspace.test_dir}/{self.name}.in".replace("/", _sep())

    def output_path(self) -> str:
        return f"{self.workspace.test_dir}/{self.name}.out".replace("/", _sep())

    def read_input(self) -> str:
        """The input, read from its file the first time it is needed."""
        if self._input is not None:
            return self._input
        path = self.input_path()
        if not self.workspace.exists(path):
            raise TestCaseError(f"input file not found: {path}")
        self._input = self.workspace.read_file(path)
        return self._input

    def read_want(self) -> str:
        """The expected output, read from its file the first time it is needed."""
        if self._want is not None:
            return self._want
        self._want = self.workspace.read_file(self.output_path())
        return self._want

    def result(self) -> str:
        """The solution's output from the last run."""
        if self._got is None:
            raise TestCaseError("no result yet: run the test case first")
        return self._got

    def input_want_got(self) -> Tuple[str, str, str]:
        return self.read_input(), self.read_want(), self.result()

    def run(self, language: "Language") -> str:
        """Run the solution on the input once and keep its trimmed output."""
        self.workspace.logger.debug("Running test case %s", self.name)
        if self._got is not None:
            return self._got
        stdin = self.read_input()
        captured = io.StringIO()
        self.workspace.run(language.run_cmd, stdin, captured, self.workspace.stderr)
        self._got = captured.getvalue().strip()
        self.workspace.logger.debug("Run done: result = %s", self._got)
        return self._got

    def passed(self) -> bool:
        """Whether the output matches the expected output exactly."""
        try:
            return self.result() == self.read_want()
        except (OSError, TestCaseError):
            return False

    def report(self) -> None:
        """Print the outcome; a failure shows input, expected and actual output."""
        if self.passed():
            self.workspace.print_err(f"✅ Test {self.name} passed")
            return
        given, want, got = self.input_want_got()
        self.workspace.print_err(f"❌ Test {self.name} failed\n")
        for label, text in (("Input:", given), ("Expected:", want), ("Got:", got)):
            self.workspace.print_err(label)
            self.workspace.print_err(text)

    def write(self) -> None:
        """Write the input and the expected output to their files."""
        self.workspace.write_file(self.input_path(), self.read_input(), 0o644)
        self.workspace.write_file(self.output_path(), self.read_want(), 0o644)


def _sep() -> str:
    import os

    return os.sep


class TestCases(list):
    """An ordered collection of test cases; each operation stops at the first error."""

    __test__ = False

    def add(self, case: TestCase) -> None:
        self.append(case)

    def write(self) -> None:
        for case in self:
            case.write()

    def run(self, language: "Language") -> None:
        for case in self:
            case.run(language)

    def report(self) -> None:
        for case in self:
            case.report()

    def run_and_report(self, language: "Language") -> None:
        self.run(language)
        self.report()