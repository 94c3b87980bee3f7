import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Union

import requests

from .client import fetch_passage_text
from .errors import MissingContextError
from .settings import DisplayOptions, SettingsStore


class PassageHost(Protocol):
    """What the fetch command needs from the application it runs inside."""

    def get_active_title(self) -> Optional[str]:
        ...

    def get_credential(self) -> str:
        ...

    def get_display_options(self) -> DisplayOptions:
        ...

    def fetch_text(self, query: str) -> str:
        ...

    def insert_at_cursor(self, text: str) -> None:
        ...

    def notify(self, message: str) -> None:
        ...


@dataclass(frozen=True)
class Cursor:
    """Zero-based editor position."""
    line: int
    ch: int = 0


def insert_at(content: str, text: str, cursor: Optional[Cursor]) -> str:
    """Insert text into content at cursor.

    The line is clamped to the document and the column to that line, the way
    an editor clamps an out-of-range position. Without a cursor the text is
    appended to the end of the document.
    """
    if cursor is None:
        return content + text

    lines = content.split('\n')
    line = min(max(cursor.line, 0), len(lines) - 1)
    ch = min(max(cursor.ch, 0), len(lines[line]))
    offset = sum(len(previous) + 1 for previous in lines[:line]) + ch
    return content[:offset] + text + content[offset:]


class NoteFileHost:
    """Runs the fetch command against a Markdown note on disk.

    The note's file name (without extension) is the passage reference, so a
    note saved as "Genesis 1.md" fetches Genesis 1.
    """

    def __init__(self, note_path: Union[str, Path], store: SettingsStore,
                 cursor: Optional[Cursor] = None,
                 session: Optional[requests.Session] = None):
        self.note_path = Path(note_path)
        self.store = store
        self.cursor = cursor
        self.session = session
        self._settings = None

    @property
    def settings(self):
        if self._settings is None:
            self._settings = self.store.load()
        return self._settings

    def get_active_title(self) -> Optional[str]:
        return self.note_path.stem or None

    def get_credential(self) -> str:
        return self.settings.api_key

    def get_display_options(self) -> DisplayOptions:
        return self.settings.display_options()

    def fetch_text(self, query: str) -> str:
        return fetch_passage_text(query, self.get_credential(), http=self.session)

    def insert_at_cursor(self, text: str) -> None:
        if not self.note_path.is_file():
            raise MissingContextError(f"No note to write into at {self.note_path}")
        try:
            content = self.note_path.read_text(encoding='utf-8')
            self.note_path.write_text(insert_at(content, text, self.cursor), encoding='utf-8')
        except (OSError, UnicodeError) as e:
            raise MissingContextError(f"Could not update note {self.note_path}: {e}") from e

    def notify(self, message: str) -> None:
        logging.info(message)
        print(message)
