"""The command-line tool: download samples, set up contests, log in and test."""

from __future__ import annotations

import logging
import os
import sys
from typing import Callable, List, Optional, Sequence

from .atcoder import AtCoder, AtCoderError
from .command import Command, ExitCode
from .testcase import TestCaseError
from .workspace import Workspace, WorkspaceError

ClientFactory = Callable[[Workspace], AtCoder]

_FAILURES = (AtCoderError, WorkspaceError, TestCaseError, OSError)

_LOGIN_LONG = (
    "以下の手順に従いAtcoderのログイン情報(REVEL_SESSION)をローカル"
    "($HOME/.local/share/atcoder-cli/cookie.txt)に保存します。\n"
    "  1. このコマンドを実行します。\n"
    "  2. ブラウザでAtcoderにログインします。\n"
    "  3. REVEL_SESSIONをコピーして貼り付けます。"
)


def parse_init_args(args: Sequence[str]) -> str:
    """The contest named by the first argument; the rest are ignored."""
    if not args:
        raise ValueError("コンテスト名を指定してください")
    return args[0]


def run_download(workspace: Workspace, client: AtCoder) -> ExitCode:
    """Save the samples of the problem the working directory belongs to."""
    log = workspace.logger
    try:
        contest, problem = workspace.contest_and_problem()
    except WorkspaceError as exc:
        log.error("fail to get contest and problem: %s", exc)
        return ExitCode.ERROR
    try:
        cases = client.test_cases(contest, problem)
    except _FAILURES as exc:
        log.error("Fail to get test cases: %s", exc)
        return ExitCode.ERROR
    try:
        workspace.make_test_dir()
    except OSError as exc:
        log.error("Fail to create test dir: %s", exc)
        return ExitCode.ERROR
    try:
        cases.write()
    except _FAILURES as exc:
        log.error("Fail to write test cases: %s", exc)
        return ExitCode.ERROR
    return ExitCode.OK


def run_init(workspace: Workspace, client: AtCoder, contest: str) -> ExitCode:
    """Create a directory for the contest and one inside it for each problem."""
    try:
        problem_ids: List[str] = client.problem_ids(contest)
        workspace.make_dir(contest)
        for problem_id in problem_ids:
            workspace.make_dir(os.path.join(contest, problem_id))
    except _FAILURES as exc:
        workspace.logger.error("%s", exc)
        return ExitCode.ERROR
    return ExitCode.OK


def run_login(workspace: Workspace, client: AtCoder) -> ExitCode:
    """Ask for the session cookie, store it and check that it logs in."""
    log = workspace.logger
    try:
        if client.login_check():
            log.error("既にログインしています")
            return ExitCode.OK
        cookie = workspace.prompt_cookie()
        workspace.save_cookie(cookie)
        client.reload_cookies()
        logged_in = client.login_check()
    except _FAILURES as exc:
        log.error("%s", exc)
        return ExitCode.ERROR
    if not logged_in:
        log.error("ログインに失敗しました")
        return ExitCode.ERROR
    log.error("ログインに成功しました")
    return ExitCode.OK


def run_test(workspace: Workspace) -> ExitCode:
    """Build the solution, run it on every sample, report and clean up."""
    log = workspace.logger
    log.debug("Call run_test")
    if not workspace.has_test_cases():
        log.error("テストケースがダウンロードされていません。")
        return ExitCode.ERROR
    try:
        language = workspace.detect_language()
        log.debug("Detected Language: %s", language.name)

        log.debug("Building...")
        workspace.run(language.build_cmd)
        log.debug("Build done")

        log.debug("Fetching test cases...")
        cases = workspace.fetch_test_cases()
        log.debug("Fetching test cases done")

        log.debug("Running and Reporting tests...")
        cases.run_and_report(language)
        log.debug("Running and Reporting tests done")

        log.debug("Cleaning up...")
        workspace.run(language.cleanup_cmd)
        log.debug("Cleaning up done")
    except _FAILURES as exc:
        log.error("%s", exc)
        return ExitCode.ERROR
    return ExitCode.OK


def build_root(workspace: Workspace, client_factory: ClientFactory = AtCoder) -> Command:
    """The root command with every sub-command attached."""
    root = Command("atcoder-cli", short="atcoderを便利に使う小さなコマンド群")
    root.workspace = workspace

    root.add(
        Command(
            "download",
            short="問題のサンプルケースをダウンロードします",
            aliases=("d",),
            runner=lambda ws, _options: run_download(ws, client_factory(ws)),
        )
    )
    root.add(
        Command(
            "init <contest>",
            short="コンテストのディレクトリ構造を初期化します",
            aliases=("i",),
            parse_args=parse_init_args,
            runner=lambda ws, contest: run_init(ws, client_factory(ws), contest),
        )
    )
    root.add(
        Command(
            "login",
            short="Atcoderのログイン情報をローカルに保存します",
            long=_LOGIN_LONG,
            aliases=("l",),
            runner=lambda ws, _options: run_login(ws, client_factory(ws)),
        )
    )
    root.add(
        Command(
            "test",
            short="テストコマンド",
            aliases=("t",),
            runner=lambda ws, _options: run_test(ws),
        )
    )
    return root


def _configure_logger() -> logging.Logger:
    logger = logging.getLogger("atcoder_tool")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("level=%(levelname)s msg=%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
    return logger


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the tool with ``argv`` (the process arguments by default)."""
    if argv is None:
        argv = sys.argv[1:]
    workspace = Workspace(logger=_configure_logger())
    return int(build_root(workspace).execute(list(argv)))


if __name__ == "__main__":
    raise SystemExit(main())