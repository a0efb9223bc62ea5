"""Normalisation of user-supplied strings."""

from __future__ import annotations


def parse_input_string(value: str) -> str:
    """Trim surrounding whitespace and lower-case ``value``."""
    return value.strip().lower()


def parse_input_string_opt(value: str | None) -> str | None:
    """Like :func:`parse_input_string`, passing None through unchanged."""
    if value is None:
        return None
    return parse_input_string(value)