"""
github_api/pulls.py — pobieranie opisów tematów z pull requestów GitHuba.

Każdy temat (topic) ma swój PR do gałęzi bazowej (domyślnie stable);
gałąź źródłowa PR nazywa się tak samo jak katalog tematu. Opis tematu to
sekcja "Topic Description" z treści PR, a gdy jej brak — tytuł PR.

Publiczne API:
  create_session(settings)                      -> requests.Session
  fetch_page(session, repo, page, settings)     -> list[PullRequest]
  iter_pull_requests(repo, settings, session)   -> Iterator[PullRequest]
  describe_pull(pr)                             -> str | None
  fetch_descriptions(repo, settings, session)   -> dict[branch, opis]
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import requests

from control_parser import extract_topic_description
from tmg.settings import Settings

logger = logging.getLogger(__name__)

PER_PAGE = 100
_ACCEPT  = "application/vnd.github.v3+json"

# Maks. czas oczekiwania (s) na reset limitu; dłuższy kończy się GitHubError
MAX_RETRY_WAIT = 300.0


class GitHubError(RuntimeError):
    """Błąd komunikacji z API GitHuba lub niepoprawna odpowiedź."""


@dataclass(slots=True)
class PullRequest:
    number: int
    title: str
    branch: str          # head.ref — nazwa gałęzi == nazwa tematu
    body: str | None


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

def _check_repo(repo: str) -> str:
    owner, sep, name = repo.partition("/")
    if not sep or not owner or not name or "/" in name:
        raise GitHubError(f"Niepoprawna nazwa repozytorium: {repo!r} (oczekiwano OWNER/NAZWA)")
    return repo


def create_session(settings: Settings) -> requests.Session:
    session = requests.Session()
    session.headers.update({
        "User-Agent": settings.user_agent,
        "Accept":     _ACCEPT,
    })
    if settings.github_token:
        session.headers["Authorization"] = f"token {settings.github_token}"
    else:
        logger.warning("Ustaw GITHUB_TOKEN, żeby zwiększyć limity zapytań API.")
    return session


def _pull_from_json(item: dict[str, Any]) -> PullRequest:
    try:
        return PullRequest(
            number=int(item["number"]),
            title=item.get("title") or "",
            branch=item["head"]["ref"],
            body=item.get("body"),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise GitHubError(f"Niepoprawny obiekt pull requesta: {exc}") from exc


def _header_float(resp: requests.Response, name: str) -> float | None:
    raw = resp.headers.get(name)
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def _rate_limit_delay(resp: requests.Response, attempt: int) -> float | None:
    """
    Czas oczekiwania (s) dla odpowiedzi rate-limit; None dla pozostałych.

    Rate-limit to 429 albo 403 z wyczerpanym X-RateLimit-Remaining lub
    z nagłówkiem Retry-After (limit drugorzędny GitHuba).
    """
    if resp.status_code == 403:
        if resp.headers.get("X-RateLimit-Remaining") != "0" and "Retry-After" not in resp.headers:
            return None
    elif resp.status_code != 429:
        return None

    retry_after = _header_float(resp, "Retry-After")
    if retry_after is not None:
        return max(retry_after, 0.0)
    reset = _header_float(resp, "X-RateLimit-Reset")
    if reset is not None:
        return max(reset - time.time(), 0.0) + 1.0
    return 2 ** attempt * 5


def fetch_page(
    session: requests.Session,
    repo: str,
    page: int,
    settings: Settings,
) -> list[PullRequest]:
    """
    Pobiera jedną stronę (1-based) otwartych PR do gałęzi bazowej.

    Przy rate-limit (429 / 403) czeka sugerowany czas i ponawia próbę
    (do settings.max_retries razy). Reset limitu odległy o więcej niż
    MAX_RETRY_WAIT sekund nie jest ponawiany.
    """
    url = f"{settings.api_url}/repos/{repo}/pulls"
    params = {"base": settings.base_branch, "per_page": PER_PAGE, "page": page}
    attempt = 0

    while True:
        try:
            resp = session.get(url, params=params, timeout=settings.timeout)
        except requests.RequestException as exc:
            raise GitHubError(f"Żądanie {url} (strona {page}) nie powiodło się: {exc}") from exc

        delay = _rate_limit_delay(resp, attempt + 1)
        if delay is None:
            break

        attempt += 1
        if attempt > settings.max_retries:
            raise GitHubError(
                f"Rate-limit API GitHuba po {settings.max_retries} próbach. Spróbuj później."
            )
        if delay > MAX_RETRY_WAIT:
            raise GitHubError(
                f"Limit zapytań API GitHuba wyczerpany (reset za {delay:.0f}s). "
                f"Ustaw GITHUB_TOKEN lub spróbuj później."
            )
        logger.warning(
            "%d rate-limit, czekam %.0fs (próba %d/%d)",
            resp.status_code, delay, attempt, settings.max_retries,
        )
        time.sleep(delay)

    try:
        resp.raise_for_status()
        payload = resp.json()
    except requests.RequestException as exc:
        raise GitHubError(f"Żądanie {url} (strona {page}) nie powiodło się: {exc}") from exc
    except ValueError as exc:
        raise GitHubError(f"Odpowiedź {url} nie jest poprawnym JSON: {exc}") from exc

    if not isinstance(payload, list):
        raise GitHubError(f"Oczekiwano listy PR, otrzymano {type(payload).__name__}")
    return [_pull_from_json(item) for item in payload]


def iter_pull_requests(
    repo: str,
    settings: Settings,
    session: requests.Session | None = None,
) -> Iterator[PullRequest]:
    """Iteruje po wszystkich stronach; koniec na stronie krótszej niż PER_PAGE."""
    _check_repo(repo)
    if session is None:
        session = create_session(settings)
    page = 1
    while True:
        pulls = fetch_page(session, repo, page, settings)
        logger.debug("Strona %d: %d pull requestów", page, len(pulls))
        yield from pulls
        if len(pulls) < PER_PAGE:
            return
        page += 1


# ---------------------------------------------------------------------------
# Opisy
# ---------------------------------------------------------------------------

def describe_pull(pr: PullRequest) -> str | None:
    """Sekcja "Topic Description" z treści PR; w razie braku — tytuł."""
    if pr.body:
        section = extract_topic_description(pr.body.encode("utf-8"))
        if section is not None:
            text = section.decode("utf-8", errors="replace").replace("\r\n", "\n").strip()
            if text:
                return text
        logger.debug("PR #%d (%s): brak sekcji opisu, używam tytułu", pr.number, pr.branch)
    return pr.title.strip() or None


def fetch_descriptions(
    repo: str,
    settings: Settings,
    session: requests.Session | None = None,
) -> dict[str, str]:
    """
    Zwraca mapę: nazwa gałęzi źródłowej → opis tematu.

    Raises:
        GitHubError: niepoprawna nazwa repo, błąd HTTP lub zła odpowiedź.
    """
    results: dict[str, str] = {}
    for pr in iter_pull_requests(repo, settings, session):
        description = describe_pull(pr)
        if description is not None:
            results[pr.branch] = description
    return results
