"""
github_api — pobieranie opisów tematów z pull requestów GitHuba.

Typowe użycie:
    from github_api import fetch_descriptions
    from tmg.settings import load_settings

    descriptions = fetch_descriptions("AOSC-Dev/aosc-os-abbs", load_settings())
"""

from .pulls import (
    PER_PAGE,
    GitHubError,
    PullRequest,
    create_session,
    describe_pull,
    fetch_descriptions,
    fetch_page,
    iter_pull_requests,
)

__all__ = [
    "PER_PAGE",
    "GitHubError",
    "PullRequest",
    "create_session",
    "describe_pull",
    "fetch_descriptions",
    "fetch_page",
    "iter_pull_requests",
]
