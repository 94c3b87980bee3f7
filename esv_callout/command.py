import logging
from typing import Optional

from .errors import MissingContextError, MissingCredentialError, PassageError, UpstreamError
from .formatter import format_passage
from .host import PassageHost
from .query import build_query

NO_NOTE_MESSAGE = 'No active file found!'
NO_API_KEY_MESSAGE = 'No API Set.  Please Set ESV API Key in Config Settings'


def fetch_passage(host: PassageHost) -> Optional[str]:
    """Fetch the passage named by the active note and insert it at the cursor.

    The note is only written after the passage has been fetched and formatted.
    Every failure is reported through host.notify and leaves the note as it
    was. Returns the inserted text, or None when nothing was inserted.
    """
    title = None
    try:
        title = host.get_active_title()
        if not title:
            raise MissingContextError(NO_NOTE_MESSAGE)

        api_key = host.get_credential()
        if not api_key:
            raise MissingCredentialError(NO_API_KEY_MESSAGE)

        options = host.get_display_options()
        raw_text = host.fetch_text(build_query(title, options))
        callout = format_passage(raw_text, options)
        host.insert_at_cursor(callout)
    except UpstreamError as e:
        logging.error(f"Fetch error for {title}: {e}")
        host.notify(f"Failed to fetch passage. Error: {e}")
        return None
    except PassageError as e:
        logging.error(str(e))
        host.notify(str(e))
        return None

    host.notify(f"Passage added to {title}")
    return callout
