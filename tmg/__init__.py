"""tmg — generator manifestu tematów (topics) repozytorium pakietów."""

__version__ = "0.1.0"
