"""JSON-based persistence for settings and events of the calendar.

Everything lives in one file: the settings keys next to an ``"events"``
mapping of ``"<year>-<month>-<day>"`` to event lists.
"""

import json
import logging
import os

from calendar_logic import VIEWS

logger = logging.getLogger(__name__)

EVENTS_KEY = "events"

_DEFAULTS = {
    "view": "month",
    "window_width": None,
    "window_height": None,
}


def settings_path() -> str:
    return os.environ.get(
        "POCKET_CALENDAR_FILE",
        os.path.join(os.path.expanduser("~"), ".pocket-calendar.json"),
    )


def _read_file(path: str) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return {}
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
        logger.debug("Unreadable calendar file %s: %s", path, exc)
        return {}
    if not isinstance(stored, dict):
        logger.debug("Calendar file %s holds no mapping", path)
        return {}
    return stored


def _write_file(path: str, data: dict) -> None:
    # Dump next to the target, then swap it in; the old file stays whole
    # until the new one is complete
    tmp_path = path + ".tmp"
    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


def load_settings(path: str | None = None) -> dict:
    """Load settings from disk, returning defaults for missing keys."""
    settings = dict(_DEFAULTS)
    stored = _read_file(path or settings_path())
    if stored.get("view") in VIEWS:
        settings["view"] = stored["view"]
    for key in ("window_width", "window_height"):
        value = stored.get(key)
        if isinstance(value, int) and not isinstance(value, bool):
            settings[key] = value
    return settings


def save_settings(settings: dict, path: str | None = None) -> None:
    """Persist settings to disk, keeping the stored events."""
    path = path or settings_path()
    data = _read_file(path)
    data.update({k: settings.get(k, v) for k, v in _DEFAULTS.items()})
    _write_file(path, data)


class EventFile:
    """Load/save the events mapping for an EventStore."""

    def __init__(self, path: str | None = None) -> None:
        self.path = path or settings_path()

    def load(self) -> dict:
        events = _read_file(self.path).get(EVENTS_KEY, {})
        if not isinstance(events, dict):
            logger.debug("Ignoring non-mapping events in %s", self.path)
            return {}
        return events

    def save(self, mapping: dict) -> None:
        data = _read_file(self.path)
        data[EVENTS_KEY] = mapping
        try:
            _write_file(self.path, data)
        except OSError:
            logger.exception("Could not save events to %s", self.path)
