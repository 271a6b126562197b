"""Client for the contest site: login check, sample cases and problem lists."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, List, Mapping, Optional
from urllib.parse import urlparse

import requests

from .testcase import TestCase, TestCases

if TYPE_CHECKING:
    from .workspace import Workspace

BASE_URL = "https://atcoder.jp"
LOGIN_CHECK_PATH = "/contests/abc001/submit"

_HOST = urlparse(BASE_URL).hostname
_SAMPLE_RE = re.compile(
    r"<h3>(入力例|出力例)\s*\d+</h3>\s*<pre>([\s\S]*?)</pre>", re.ASCII
)
_TASK_RE = re.compile(r"/contests/[^/]+/tasks/[^/]+_([a-zA-Z0-9]+)")


class AtCoderError(Exception):
    """Raised when the site cannot be reached or answers unexpectedly."""


def problem_path(contest: str, problem: str) -> str:
    """Path of a problem page; hyphens in the contest become underscores in the task id."""
    return f"/contests/{contest}/tasks/{contest.replace('-', '_')}_{problem}"


def parse_test_cases(html: str, workspace: "Workspace") -> TestCases:
    """Sample inputs and outputs of a problem page, paired in page order."""
    matches = _SAMPLE_RE.findall(html)
    if len(matches) % 2 != 0:
        raise AtCoderError("入力と出力のペアが揃っていません")
    cases = TestCases()
    pairs = zip(matches[::2], matches[1::2])
    for number, ((in_kind, in_text), (out_kind, out_text)) in enumerate(pairs, start=1):
        if in_kind != "入力例" or out_kind != "出力例":
            raise AtCoderError("入力/出力の順番が想定と異なります")
        cases.add(TestCase(workspace, str(number), in_text.strip(), out_text.strip()))
    return cases


def parse_problem_ids(html: str) -> List[str]:
    """Lower-cased problem ids linked from a task list, first occurrence first."""
    seen = set()
    ids = []
    for raw in _TASK_RE.findall(html):
        problem_id = raw.lower()
        if problem_id not in seen:
            seen.add(problem_id)
            ids.append(problem_id)
    return ids


def _status(response: requests.Response) -> str:
    return f"{response.status_code} {response.reason or ''}".rstrip()


def _body(response: requests.Response) -> str:
    return response.content.decode("utf-8", errors="replace")


class AtCoder:
    """HTTP access to the site, carrying the stored login cookie."""

    def __init__(self, workspace: "Workspace", session: Optional[requests.Session] = None):
        self.workspace = workspace
        self.base_url = BASE_URL
        self.session = session if session is not None else requests.Session()
        self.reload_cookies()

    def reload_cookies(self) -> None:
        """Put the cookies from the workspace's cookie file into the session."""
        for name, value in self.workspace.load_cookies():
            self.session.cookies.set(name, value, domain=_HOST, path="/")

    def get(self, path: str) -> requests.Response:
        log = self.workspace.logger
        log.debug("Call Get to %s", path)
        for cookie in self.session.cookies:
            log.debug("Sending Cookie: %s=%s", cookie.name, cookie.value)
        try:
            response = self.session.get(self.base_url + path)
        except requests.RequestException as exc:
            raise AtCoderError(str(exc)) from exc
        log.debug("Response Status: %s", _status(response))
        log.debug("Response URL: %s", response.url)
        log.debug("Response Cookies: %s", dict(response.cookies))
        log.debug("Response Headers: %s", dict(response.headers))
        return response

    def post(self, path: str, data: Mapping[str, str]) -> requests.Response:
        """Send ``data`` as a url-encoded form."""
        try:
            return self.session.post(
                self.base_url + path,
                data=data,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
        except requests.RequestException as exc:
            raise AtCoderError(str(exc)) from exc

    def login_check(self) -> bool:
        """Whether the session may open a submit page without being redirected."""
        log = self.workspace.logger
        log.debug("Call LoginCheck")
        with self.get(LOGIN_CHECK_PATH) as response:
            if urlparse(response.url).path != LOGIN_CHECK_PATH:
                log.debug("Response Url.Path is not %s", LOGIN_CHECK_PATH)
                return False
            if response.status_code != 200:
                log.debug("Response StatusCode is not 200")
                raise AtCoderError(f"HTTPエラー: {_status(response)}")
        log.debug("Call LoginCheck done")
        return True

    def problem_page(self, contest: str, problem: str) -> requests.Response:
        return self.get(problem_path(contest, problem))

    def test_cases(self, contest: str, problem: str) -> TestCases:
        """The sample cases of one problem."""
        with self.problem_page(contest, problem) as response:
            if response.status_code != 200:
                raise AtCoderError(f"HTTPエラー (test cases): {_status(response)}")
            return parse_test_cases(_body(response), self.workspace)

    def task_page(self, contest: str) -> requests.Response:
        return self.get(f"/contests/{contest}/tasks")

    def problem_ids(self, contest: str) -> List[str]:
        """Ids of the problems listed for a contest."""
        with self.task_page(contest) as response:
            if response.status_code != 200:
                raise AtCoderError(f"HTTPエラー (problem ids): {_status(response)}")
            return parse_problem_ids(_body(response))