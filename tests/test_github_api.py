import logging

import pytest
import requests

import github_api.pulls
from github_api import (
    PER_PAGE,
    GitHubError,
    PullRequest,
    create_session,
    describe_pull,
    fetch_descriptions,
    fetch_page,
    iter_pull_requests,
)
from tmg.settings import ConfigError, Settings, load_settings


BODY = (
    "<!-- please fill in -->\r\n"
    "Topic Description\r\n"
    "-----------------\r\n"
    "\r\n"
    "- zsync: update to 0.6.2\r\n"
    "\r\n"
    "Package(s) Affected\r\n"
    "-------------------\r\n"
    "\r\n"
    "- zsync\r\n"
)


def _pull(number, branch, title="title", body=None):
    return {"number": number, "title": title, "head": {"ref": branch}, "body": body}


class FakeResponse:
    def __init__(self, payload, status=200, headers=None):
        self.payload = payload
        self.status_code = status
        self.headers = headers or {}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeSession:
    def __init__(self, pages):
        self.pages = pages
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, dict(params), timeout))
        return self.pages[params["page"] - 1]


class SequenceSession(FakeSession):
    """Zwraca odpowiedzi w kolejności wywołań (ponowienia tej samej strony)."""

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, dict(params), timeout))
        return self.pages[len(self.calls) - 1]


def test_pagination_stops_on_short_page():
    first = [_pull(i, f"topic-{i}") for i in range(PER_PAGE)]
    second = [_pull(1000, "topic-last")]
    session = FakeSession([FakeResponse(first), FakeResponse(second)])
    settings = Settings(base_branch="stable", timeout=5)

    pulls = list(iter_pull_requests("AOSC-Dev/aosc-os-abbs", settings, session))

    assert len(pulls) == PER_PAGE + 1
    assert pulls[-1].branch == "topic-last"
    assert [c[1]["page"] for c in session.calls] == [1, 2]
    url, params, timeout = session.calls[0]
    assert url == "https://api.github.com/repos/AOSC-Dev/aosc-os-abbs/pulls"
    assert params["base"] == "stable"
    assert params["per_page"] == PER_PAGE
    assert timeout == 5


def test_single_short_page():
    session = FakeSession([FakeResponse([])])
    assert list(iter_pull_requests("o/r", Settings(), session)) == []
    assert len(session.calls) == 1


def test_describe_pull_prefers_section():
    pr = PullRequest(number=1, title="  zsync: update  ", branch="zsync-update", body=BODY)
    assert describe_pull(pr) == "- zsync: update to 0.6.2"


def test_describe_pull_falls_back_to_title():
    pr = PullRequest(number=1, title="  zsync: update  ", branch="zsync-update", body="no template")
    assert describe_pull(pr) == "zsync: update"
    assert describe_pull(PullRequest(number=2, title="", branch="b", body=None)) is None


def test_fetch_descriptions_maps_branch_names():
    session = FakeSession([FakeResponse([
        _pull(1, "zsync-update", body=BODY),
        _pull(2, "rsync-update", title="rsync: 3.1.3"),
    ])])
    descriptions = fetch_descriptions("o/r", Settings(), session)
    assert descriptions == {
        "zsync-update": "- zsync: update to 0.6.2",
        "rsync-update": "rsync: 3.1.3",
    }


@pytest.mark.parametrize("response", [
    FakeResponse([], status=403),
    FakeResponse(ValueError("not json")),
    FakeResponse({"message": "Not Found"}),
    FakeResponse([{"number": 1, "title": "no head"}]),
])
def test_fetch_errors_become_github_error(response):
    with pytest.raises(GitHubError):
        fetch_descriptions("o/r", Settings(), FakeSession([response]))


@pytest.mark.parametrize("repo", ["", "noslash", "/name", "owner/", "a/b/c"])
def test_invalid_repo_name(repo):
    session = FakeSession([])
    with pytest.raises(GitHubError):
        fetch_descriptions(repo, Settings(), session)
    assert session.calls == []


def test_create_session_headers(caplog):
    session = create_session(Settings(github_token="secret"))
    assert session.headers["Authorization"] == "token secret"
    assert session.headers["Accept"] == "application/vnd.github.v3+json"
    assert session.headers["User-Agent"].startswith("topic-manifest/")

    caplog.set_level(logging.WARNING)
    session = create_session(Settings())
    assert "Authorization" not in session.headers
    assert "GITHUB_TOKEN" in caplog.text


def test_load_settings_from_env(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "abc")
    monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example.com/api/v3/")
    monkeypatch.setenv("TMG_BASE_BRANCH", "main")
    monkeypatch.setenv("TMG_HTTP_TIMEOUT", "7.5")
    settings = load_settings()
    assert settings.github_token == "abc"
    assert settings.api_url == "https://ghe.example.com/api/v3"
    assert settings.base_branch == "main"
    assert settings.timeout == 7.5

    for name in ("GITHUB_TOKEN", "GITHUB_API_URL", "TMG_BASE_BRANCH", "TMG_HTTP_TIMEOUT"):
        monkeypatch.delenv(name)
    settings = load_settings()
    assert settings.github_token is None
    assert settings.api_url == "https://api.github.com"
    assert settings.base_branch == "stable"


def test_load_settings_rejects_bad_numbers(monkeypatch):
    monkeypatch.setenv("TMG_HTTP_TIMEOUT", "abc")
    with pytest.raises(ConfigError, match="TMG_HTTP_TIMEOUT"):
        load_settings()

    monkeypatch.setenv("TMG_HTTP_TIMEOUT", "10")
    monkeypatch.setenv("TMG_HTTP_RETRIES", "-1")
    with pytest.raises(ConfigError, match="TMG_HTTP_RETRIES"):
        load_settings()

    monkeypatch.setenv("TMG_HTTP_RETRIES", "5")
    assert load_settings().max_retries == 5


@pytest.fixture
def sleeps(monkeypatch):
    waited = []
    monkeypatch.setattr(github_api.pulls.time, "sleep", waited.append)
    return waited


def test_rate_limit_429_is_retried(sleeps, caplog):
    session = SequenceSession([
        FakeResponse({"message": "slow down"}, status=429, headers={"Retry-After": "2"}),
        FakeResponse([_pull(1, "zsync-update")]),
    ])
    caplog.set_level(logging.WARNING)

    pulls = fetch_page(session, "o/r", 1, Settings())

    assert [p.branch for p in pulls] == ["zsync-update"]
    assert sleeps == [2.0]
    assert len(session.calls) == 2
    assert "rate-limit" in caplog.text


def test_exhausted_quota_403_waits_for_reset(sleeps, monkeypatch):
    monkeypatch.setattr(github_api.pulls.time, "time", lambda: 1000.0)
    session = SequenceSession([
        FakeResponse(
            {"message": "API rate limit exceeded"},
            status=403,
            headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "1010"},
        ),
        FakeResponse([]),
    ])

    assert fetch_page(session, "o/r", 1, Settings()) == []
    assert sleeps == [11.0]


def test_rate_limit_without_hints_backs_off_exponentially(sleeps):
    limited = FakeResponse({}, status=429)
    session = SequenceSession([limited, limited, FakeResponse([])])

    assert fetch_page(session, "o/r", 1, Settings()) == []
    assert sleeps == [10, 20]


def test_rate_limit_gives_up_after_max_retries(sleeps):
    limited = FakeResponse({}, status=429, headers={"Retry-After": "1"})
    session = SequenceSession([limited] * 3)

    with pytest.raises(GitHubError, match="2 próbach"):
        fetch_page(session, "o/r", 1, Settings(max_retries=2))
    assert sleeps == [1.0, 1.0]
    assert len(session.calls) == 3


def test_rate_limit_with_distant_reset_is_not_retried(sleeps, monkeypatch):
    monkeypatch.setattr(github_api.pulls.time, "time", lambda: 1000.0)
    session = SequenceSession([
        FakeResponse({}, status=403, headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "4600"}),
    ])

    with pytest.raises(GitHubError, match="GITHUB_TOKEN"):
        fetch_page(session, "o/r", 1, Settings())
    assert sleeps == []


def test_plain_403_is_not_retried(sleeps):
    session = SequenceSession([FakeResponse({}, status=403, headers={"X-RateLimit-Remaining": "42"})])
    with pytest.raises(GitHubError):
        fetch_page(session, "o/r", 1, Settings())
    assert sleeps == []
