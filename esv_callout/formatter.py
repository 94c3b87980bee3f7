from typing import Iterable, List

from .settings import DisplayOptions

NO_TITLE = 'No Title'
QUOTE_PREFIX = '> '
PASSAGE_SEPARATOR = '\n\n'


def join_passages(passages: Iterable[str]) -> str:
    """Join the passages of one API response with a blank line between them."""
    return PASSAGE_SEPARATOR.join(passages)


def format_passage(raw_text: str, options: DisplayOptions) -> str:
    """Turn a plain-text passage into a Markdown callout (or plain block).

    The first line of the text is the passage title (e.g. "Genesis 1:1-5 (ESV)")
    and becomes the callout header. Every body line is quoted when callouts are
    enabled; blank lines keep only the quote marker.

    The API indents section headings that follow a run of two or more blank
    lines. That indentation turns into a code block inside a quote, so the
    first non-blank line after such a run loses its leading whitespace. A
    single blank line (an ordinary paragraph break) leaves indentation alone.
    """
    # A trailing newline ends the last line rather than opening an empty one.
    lines = [line[:-1] if line.endswith('\r') else line for line in raw_text.split('\n')]
    if lines[-1] == '':
        lines.pop()
    title_line = (lines.pop(0) if lines else '') or NO_TITLE

    if options.use_callout:
        header = f"> [!{options.callout_type}]+ {title_line}"
        prefix = QUOTE_PREFIX
    else:
        header = title_line
        prefix = ''

    blank_run = 0
    after_heading_gap = False
    output: List[str] = [header]
    for line in lines:
        if not line.strip():
            blank_run += 1
            if blank_run >= 2:
                after_heading_gap = True
            output.append(prefix)
        elif after_heading_gap:
            blank_run = 0
            after_heading_gap = False
            output.append(prefix + line.lstrip())
        else:
            blank_run = 0
            output.append(prefix + line)

    return '\n'.join(output)
