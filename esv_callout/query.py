from typing import List
from urllib.parse import quote

from .settings import DisplayOptions

ESV_API_BASE_URL = 'https://api.esv.org/v3/passage/text/'

# Characters left unescaped in the passage reference, matching encodeURIComponent.
UNESCAPED_CHARS = "-_.!~*'()"

# The API includes each of these by default, so only the disabled ones are sent.
DISABLE_PARAMS = {
    'show_footnotes': 'include-footnotes=false',
    'show_headings': 'include-headings=false',
    'show_verse_numbers': 'include-verse-numbers=false',
}


def build_query(title: str, options: DisplayOptions) -> str:
    """Build the passage-text query string for a note title.

    The title is used as-is for the passage reference (e.g. "Genesis 1"), only
    URL-escaped. Paragraph indentation is always turned off; footnotes,
    headings and verse numbers are switched off only when the matching option
    is False.
    """
    params: List[str] = [
        f"q={quote(title, safe=UNESCAPED_CHARS)}",
        'indent-paragraphs=0',
    ]
    for option, param in DISABLE_PARAMS.items():
        if getattr(options, option) is False:
            params.append(param)
    return '&'.join(params)


def build_url(query: str) -> str:
    return f"{ESV_API_BASE_URL}?{query}"
