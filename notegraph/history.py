"""Load the learning history file and interpret its timestamps.

The history is written by other tools; this package only reads it. It maps
document ids to entries carrying a ``date`` or ``lastStudied`` timestamp.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def load_learning_history(history_path):
    """Read the history JSON object.

    A missing file means nothing has been studied yet. An unreadable or
    malformed file is logged and treated the same way.
    """
    path = Path(history_path)
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            history = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Failed to load learning history %s: %s", path, e)
        return {}

    if not isinstance(history, dict):
        logger.warning("Ignoring learning history %s: expected an object", path)
        return {}
    return history


def parse_timestamp(value):
    """Parse an ISO-8601 date or datetime into an aware UTC datetime.

    Naive values are taken to be UTC. Returns None for anything unparseable.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def entry_date(entry):
    """Raw timestamp string of a history entry (date, then lastStudied)."""
    if not isinstance(entry, dict):
        return None
    return entry.get("date") or entry.get("lastStudied")


def entry_timestamp(entry):
    return parse_timestamp(entry_date(entry))


def days_between(then, now):
    """Elapsed days from then to now, as a float."""
    return (now - then).total_seconds() / SECONDS_PER_DAY


def utc_now():
    return datetime.now(timezone.utc)
