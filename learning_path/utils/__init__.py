"""Shared utilities for scoring, durations, and text matching."""

from .scores import clamp, days_since, parse_duration_seconds
from .text import contains_any, contains_phrase, extract_keywords

__all__ = [
    "clamp",
    "contains_any",
    "contains_phrase",
    "days_since",
    "extract_keywords",
    "parse_duration_seconds",
]
