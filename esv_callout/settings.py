import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from dotenv import load_dotenv

from .errors import SettingsError

load_dotenv()

# Constants for maintainability.
DEFAULT_CALLOUT_TYPE = 'example'
DEFAULT_SETTINGS_PATH = Path.home() / '.esv_callout.json'
DEFAULT_TIMEOUT = 30.0
API_KEY_ENV = 'ESV_API_KEY'
SETTINGS_PATH_ENV = 'ESV_CALLOUT_SETTINGS'
TIMEOUT_ENV = 'ESV_CALLOUT_TIMEOUT'

TRUE_WORDS = {'true', 'yes', 'on', '1'}
FALSE_WORDS = {'false', 'no', 'off', '0'}

# Settings whose text values are trimmed before they are stored.
TRIMMED_SETTINGS = {'api_key', 'callout_type'}


@dataclass(frozen=True)
class DisplayOptions:
    show_footnotes: bool = True
    show_headings: bool = True
    show_verse_numbers: bool = True
    use_callout: bool = True
    callout_type: str = DEFAULT_CALLOUT_TYPE


@dataclass
class Settings:
    api_key: str = ''
    show_footnotes: bool = True
    show_headings: bool = True
    show_verse_numbers: bool = True
    use_callout: bool = True
    callout_type: str = DEFAULT_CALLOUT_TYPE

    def display_options(self) -> DisplayOptions:
        """Snapshot the display toggles for a single fetch."""
        return DisplayOptions(
            show_footnotes=self.show_footnotes,
            show_headings=self.show_headings,
            show_verse_numbers=self.show_verse_numbers,
            use_callout=self.use_callout,
            callout_type=self.callout_type,
        )

    def masked(self) -> Dict[str, Any]:
        values = asdict(self)
        key = values['api_key']
        if len(key) > 4:
            values['api_key'] = '*' * 8 + key[-4:]
        elif key:
            values['api_key'] = '*' * 8
        return values


def default_settings_path() -> Path:
    override = os.getenv(SETTINGS_PATH_ENV)
    return Path(override).expanduser() if override else DEFAULT_SETTINGS_PATH


def request_timeout() -> float:
    """Seconds to wait for the passage API, from ESV_CALLOUT_TIMEOUT."""
    raw = os.getenv(TIMEOUT_ENV)
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        logging.warning(f"Ignoring invalid {TIMEOUT_ENV} value {raw!r}; using {DEFAULT_TIMEOUT}s")
        return DEFAULT_TIMEOUT


def parse_setting(name: str, value: str) -> Union[str, bool]:
    """Convert a textual setting value to the type its field expects.

    Boolean toggles accept true/false, yes/no, on/off and 1/0 in any case.
    The API key and callout type are trimmed.
    """
    types = {f.name: f.type for f in fields(Settings)}
    if name not in types:
        raise SettingsError(f"Unknown setting {name!r}. Known settings: {', '.join(types)}")
    if types[name] in (bool, 'bool'):
        word = value.strip().lower()
        if word in TRUE_WORDS:
            return True
        if word in FALSE_WORDS:
            return False
        raise SettingsError(f"Setting {name!r} expects true or false, got {value!r}")
    if name in TRIMMED_SETTINGS:
        return value.strip()
    return value


class SettingsStore:
    """JSON-backed settings, with defaults merged under the stored overrides."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path else default_settings_path()

    def _read_overrides(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding='utf-8') as handle:
                stored = json.load(handle)
        except (OSError, json.JSONDecodeError) as e:
            raise SettingsError(f"Could not read settings from {self.path}: {e}") from e
        if not isinstance(stored, dict):
            raise SettingsError(f"Settings file {self.path} must contain a JSON object")
        return stored

    def _stored_settings(self) -> Settings:
        types = {f.name: f.type for f in fields(Settings)}
        overrides = {}
        for key, value in self._read_overrides().items():
            if key in types:
                is_toggle = types[key] in (bool, 'bool')
                if not isinstance(value, bool if is_toggle else str):
                    kind = 'true or false' if is_toggle else 'a string'
                    raise SettingsError(f"Setting {key!r} in {self.path} must be {kind}, got {value!r}")
                overrides[key] = value
            else:
                logging.warning(f"Ignoring unknown setting {key!r} in {self.path}")
        return Settings(**overrides)

    def load(self) -> Settings:
        settings = self._stored_settings()
        if not settings.api_key:
            settings.api_key = os.getenv(API_KEY_ENV, '').strip()
        return settings

    def save(self, settings: Settings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as handle:
            json.dump(asdict(settings), handle, indent=2)
        logging.info(f"Saved settings to {self.path}")

    def update(self, name: str, value: str) -> Settings:
        """Apply one textual setting and persist the result."""
        parsed = parse_setting(name, value)
        settings = self._stored_settings()
        setattr(settings, name, parsed)
        self.save(settings)
        return settings
