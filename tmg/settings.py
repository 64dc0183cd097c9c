"""
tmg/settings.py — konfiguracja przez zmienne środowiskowe.

Zmienne:
  GITHUB_TOKEN       token API GitHuba (opcjonalny; bez niego niższe limity)
  GITHUB_API_URL     bazowy URL API (domyślnie https://api.github.com)
  TMG_BASE_BRANCH    gałąź bazowa pull requestów (domyślnie stable)
  TMG_HTTP_TIMEOUT   timeout żądań HTTP w sekundach (domyślnie 30)
  TMG_HTTP_RETRIES   maks. liczba ponowień przy rate-limit (domyślnie 3)

Opcjonalnie plik .env w katalogu głównym projektu (nie nadpisuje środowiska):
  GITHUB_TOKEN=ghp_...
"""

from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass

from dotenv import load_dotenv

from tmg import __version__

load_dotenv(pathlib.Path(__file__).resolve().parent.parent / ".env")


DEFAULT_API_URL     = "https://api.github.com"
DEFAULT_BASE_BRANCH = "stable"
DEFAULT_TIMEOUT     = 30.0
DEFAULT_RETRIES     = 3
USER_AGENT          = f"topic-manifest/{__version__}"


class ConfigError(ValueError):
    """Niepoprawna wartość zmiennej środowiskowej."""


@dataclass(slots=True)
class Settings:
    github_token: str | None = None
    api_url: str = DEFAULT_API_URL
    base_branch: str = DEFAULT_BASE_BRANCH
    timeout: float = DEFAULT_TIMEOUT
    max_retries: int = DEFAULT_RETRIES
    user_agent: str = USER_AGENT


def _env_number(name: str, kind: type, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = kind(raw)
    except ValueError as exc:
        raise ConfigError(f"{name}={raw!r} nie jest poprawną liczbą") from exc
    if value < 0:
        raise ConfigError(f"{name}={raw!r} nie może być ujemne")
    return value


def load_settings() -> Settings:
    """
    Buduje Settings ze zmiennych środowiskowych (puste wartości = brak).

    Raises:
        ConfigError: TMG_HTTP_TIMEOUT lub TMG_HTTP_RETRIES nie jest liczbą.
    """
    return Settings(
        github_token = os.getenv("GITHUB_TOKEN") or None,
        api_url      = (os.getenv("GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/"),
        base_branch  = os.getenv("TMG_BASE_BRANCH") or DEFAULT_BASE_BRANCH,
        timeout      = _env_number("TMG_HTTP_TIMEOUT", float, DEFAULT_TIMEOUT),
        max_retries  = _env_number("TMG_HTTP_RETRIES", int, DEFAULT_RETRIES),
    )
