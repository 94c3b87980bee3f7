import argparse
import json
import logging
from typing import List, Optional, Tuple

from .command import fetch_passage
from .errors import SettingsError
from .host import Cursor, NoteFileHost
from .settings import SettingsStore


def parse_assignment(text: str) -> Tuple[str, str]:
    """Split a NAME=VALUE argument."""
    name, sep, value = text.partition('=')
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {text!r}")
    return name.strip(), value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Insert ESV passages into Markdown notes as callouts')
    parser.add_argument('-s', '--settings',
                        help='Path to the settings file (default: $ESV_CALLOUT_SETTINGS or ~/.esv_callout.json)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    fetch = subparsers.add_parser('fetch', help='Fetch the passage named by a note and insert it into the note')
    fetch.add_argument('note',
                       help='Markdown note whose file name is the passage reference (e.g. "Genesis 1.md")')
    fetch.add_argument('--line', type=int,
                       help='Zero-based line to insert at (default: end of note)')
    fetch.add_argument('--ch', type=int, default=0,
                       help='Zero-based column to insert at (used with --line)')

    settings = subparsers.add_parser('settings', help='Show or change settings')
    settings.add_argument('--set', dest='assignments', metavar='NAME=VALUE',
                          type=parse_assignment, action='append', default=[],
                          help='Change a setting, e.g. api_key=... or use_callout=false (repeatable)')
    return parser


def run_fetch(args: argparse.Namespace, store: SettingsStore) -> int:
    cursor = Cursor(args.line, args.ch) if args.line is not None else None
    host = NoteFileHost(args.note, store, cursor=cursor)
    return 0 if fetch_passage(host) is not None else 1


def run_settings(args: argparse.Namespace, store: SettingsStore) -> int:
    for name, value in args.assignments:
        store.update(name, value)
    print(json.dumps(store.load().masked(), indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point for fetching passages and managing settings."""
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s')
    args = build_parser().parse_args(argv)
    store = SettingsStore(args.settings)

    try:
        if args.command == 'fetch':
            return run_fetch(args, store)
        return run_settings(args, store)
    except SettingsError as e:
        logging.error(str(e))
        return 1


if __name__ == '__main__':
    raise SystemExit(main())
