"""Fetch ESV passages and insert them into notes as Markdown callouts."""
from .errors import (
    MissingContextError,
    MissingCredentialError,
    PassageError,
    SettingsError,
    UpstreamError,
)
from .formatter import format_passage, join_passages
from .query import build_query, build_url
from .settings import DisplayOptions, Settings, SettingsStore

__all__ = [
    "DisplayOptions",
    "MissingContextError",
    "MissingCredentialError",
    "PassageError",
    "Settings",
    "SettingsError",
    "SettingsStore",
    "UpstreamError",
    "build_query",
    "build_url",
    "format_passage",
    "join_passages",
]
