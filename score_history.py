"""Finished-game totals for Yatzy, kept in ~/.yatzy_scores.json.

The file holds a JSON list of {"score", "date"} entries, oldest first,
trimmed to the most recent MAX_ENTRIES. Nothing here knows about a
frontend; FrontendAdapter decides when a game counts as finished.
"""

import json
from datetime import datetime
from pathlib import Path

MAX_ENTRIES = 1000
SCORES_FILE = ".yatzy_scores.json"


def _resolve(path):
    return Path(path) if path is not None else Path.home() / SCORES_FILE


def _read_entries(path):
    """Stored entries; a missing, unreadable or malformed file reads as empty.

    Items in the list that aren't JSON objects are skipped.
    """
    try:
        data = json.loads(_resolve(path).read_text())
    except (json.JSONDecodeError, OSError):
        return []
    if not isinstance(data, list):
        return []
    return [entry for entry in data if isinstance(entry, dict)]


def _write_entries(entries, path):
    _resolve(path).write_text(json.dumps(entries[-MAX_ENTRIES:], indent=2))


def record_score(score, path=None):
    """Append a finished game's total, stamped with the current time.

    Raises:
        OSError: if the file cannot be written.
    """
    entries = _read_entries(path)
    entries.append({"score": score, "date": datetime.now().isoformat()})
    _write_entries(entries, path)


def get_high_scores(limit=10, path=None):
    """Best entries first, at most ``limit`` of them."""
    ranked = sorted(_read_entries(path), key=lambda e: e.get("score", 0), reverse=True)
    return ranked[:limit]


def get_high_score(path=None):
    """Return the best recorded score, or 0 when there is none."""
    top = get_high_scores(limit=1, path=path)
    return top[0].get("score", 0) if top else 0


def get_all_scores(path=None):
    return _read_entries(path)
