"""Podkomendy CLI tmg (każdy moduł: add_parser + run)."""
