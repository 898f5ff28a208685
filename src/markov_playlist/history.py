from __future__ import annotations

import csv
from typing import Iterable, TextIO

from markov_playlist.models import Song

REQUIRED_COLUMNS = ("track", "artist", "album")


class HistoryError(ValueError):
    """Raised when a listening history cannot be decoded or is too short."""


def read_history(stream: TextIO) -> list[Song]:
    """Decode a newest-first CSV export into an oldest-first history.

    The file must have a header row naming at least ``track``, ``artist`` and
    ``album``; other columns (timestamps, ids) are ignored.
    """

    reader = csv.DictReader(stream)
    try:
        fieldnames = reader.fieldnames
        if fieldnames is None:
            return []

        missing = [name for name in REQUIRED_COLUMNS if name not in fieldnames]
        if missing:
            raise HistoryError(f"CSV header is missing required columns: {', '.join(missing)}")

        history = [_row_to_song(row, reader.line_num) for row in reader]
    except csv.Error as exc:
        raise HistoryError(f"CSV error on line {reader.line_num}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise HistoryError(f"Input file is not valid UTF-8: {exc}") from exc

    # Rows run newest-first; the chain must learn that nothing followed the newest play.
    history.reverse()
    return history


def history_from_recent(songs: Iterable[Song]) -> list[Song]:
    """Turn songs listed most-recent-first into an oldest-first history."""
    history = list(songs)
    history.reverse()
    return history


def _row_to_song(row: dict, line_num: int) -> Song:
    values = {}
    for name in REQUIRED_COLUMNS:
        value = row.get(name)
        if value is None:
            raise HistoryError(f"CSV record on line {line_num} is missing field '{name}'")
        values[name] = value
    return Song(**values)
