"""A small tree of sub-commands with shared help and verbose flags."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from .workspace import LogLevel, Workspace

ParseArgs = Callable[[List[str]], Any]
Runner = Callable[[Workspace, Any], Optional[int]]

_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_FLAGS = {"h": "help", "help": "help", "v": "verbose", "verbose": "verbose"}
_FLAG_HELP = (
    ("h", "ヘルプを表示します"),
    ("help", "ヘルプを表示します"),
    ("v", "詳細なログを出力します"),
    ("verbose", "詳細なログを出力します"),
)


class ExitCode(enum.IntEnum):
    OK = 0
    ERROR = 1


@dataclass
class _Flags:
    help: bool = False
    verbose: bool = False


def _parse_bool(name: str, value: str) -> bool:
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f'invalid boolean value "{value}" for -{name}: parse error')


def _parse_flags(args: Sequence[str]) -> Tuple[_Flags, List[str]]:
    """Read leading flags; parsing stops at the first non-flag or after ``--``."""
    flags = _Flags()
    for position, arg in enumerate(args):
        if len(arg) < 2 or not arg.startswith("-"):
            return flags, list(args[position:])
        if arg == "--":
            return flags, list(args[position + 1 :])
        body = arg[2:] if arg.startswith("--") else arg[1:]
        if not body or body.startswith(("-", "=")):
            raise ValueError(f"bad flag syntax: {arg}")
        name, has_value, value = body.partition("=")
        field = _FLAGS.get(name)
        if field is None:
            raise ValueError(f"flag provided but not defined: -{name}")
        setattr(flags, field, _parse_bool(name, value) if has_value else True)
    return flags, []


class Command:
    """A command; those with a runner can be run, the others only show usage."""

    def __init__(
        self,
        usage: str,
        short: str = "",
        long: str = "",
        aliases: Iterable[str] = (),
        parse_args: Optional[ParseArgs] = None,
        runner: Optional[Runner] = None,
    ):
        self.usage = usage
        self.short = short
        self.long = long
        self.aliases = tuple(aliases)
        self.parse_args = parse_args
        self.runner = runner
        self.parent: Optional[Command] = None
        self.children: List[Command] = []
        self._workspace: Optional[Workspace] = None

    def __repr__(self) -> str:
        return f"Command({self.usage!r})"

    @property
    def name(self) -> str:
        return self.usage.split(" ", 1)[0]

    @property
    def runnable(self) -> bool:
        return self.runner is not None

    @property
    def workspace(self) -> Workspace:
        """This command's workspace, or the root command's."""
        if self._workspace is not None:
            return self._workspace
        root = self.root()
        if root is self or root._workspace is None:
            raise RuntimeError("workspace is not set")
        return root._workspace

    @workspace.setter
    def workspace(self, workspace: Workspace) -> None:
        self._workspace = workspace

    def add(self, child: "Command") -> None:
        child.parent = self
        self.children.append(child)

    def matches(self, token: str) -> bool:
        return token == self.name or token in self.aliases

    def traverse(self, args: Sequence[str]) -> Tuple["Command", List[str]]:
        """The deepest sub-command named by the leading arguments, and the rest."""
        if not args:
            return self, list(args)
        for child in self.children:
            if child.matches(args[0]):
                return child.traverse(args[1:])
        return self, list(args)

    def root(self) -> "Command":
        return self.parent.root() if self.parent is not None else self

    def command_path(self) -> str:
        if self.parent is not None:
            return f"{self.parent.command_path()} {self.name}"
        return self.name

    def usage_line(self) -> str:
        if self.parent is not None:
            return f"{self.parent.usage_line()} {self.usage}"
        return self.usage

    def description(self) -> str:
        return self.long.strip() or self.short

    def render_usage(self) -> str:
        """The help text for this command."""
        parts = ["Usage:"]
        if self.runnable:
            parts.append(f"\n  {self.usage_line()}")
        if self.children:
            parts.append(f"\n  {self.command_path()} [command]\n\nAvailable Commands:")
            parts.extend(f"\n  {child.name:<16} {child.short}" for child in self.children)
        if self.aliases:
            parts.append(f"\n\nAliases:\n  {', '.join((self.name, *self.aliases))}")
        if self.long or self.short:
            parts.append(f"\n\nDescription:\n  {self.description()}")
        flag_lines = "".join(f"  -{name:<10}\t{text}\n" for name, text in _FLAG_HELP)
        parts.append(f"\n\nFlags:\n{flag_lines}\n")
        return "".join(parts)

    def run(self, args: Sequence[str]) -> ExitCode:
        """Parse flags and arguments, then hand them to the runner."""
        workspace = self.workspace
        try:
            flags, rest = _parse_flags(args)
        except ValueError as exc:
            workspace.logger.error("%s", exc)
            return ExitCode.ERROR

        if not self.runnable or flags.help:
            workspace.stderr.write(self.render_usage())
            return ExitCode.ERROR

        workspace.set_log_level(LogLevel.DEBUG if flags.verbose else LogLevel.INFO)

        options = None
        if self.parse_args is not None:
            try:
                options = self.parse_args(rest)
            except Exception as exc:
                workspace.logger.error("%s", exc)
                return ExitCode.ERROR

        try:
            result = self.runner(workspace, options)
        except Exception as exc:
            workspace.logger.error("%s", exc)
            return ExitCode.ERROR
        return ExitCode.OK if result is None else ExitCode(result)

    def execute(self, args: Sequence[str]) -> ExitCode:
        """Run the sub-command that ``args`` name; only the root may do this."""
        if self.parent is not None:
            self.workspace.logger.error("Execute Non Root command")
            return ExitCode.ERROR
        command, rest = self.traverse(args)
        return command.run(rest)