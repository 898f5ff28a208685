from __future__ import annotations

from typing import Sequence

from markov_playlist.history import HistoryError
from markov_playlist.models import Song, TransitionTable

MIN_WEIGHT = 1.0


def build_transitions(history: Sequence[Song]) -> TransitionTable:
    """Count every adjacent (from, to) pair of an oldest-first history.

    The newest song only gets a row if it was also played earlier and
    followed by something.
    """

    if len(history) < 2:
        raise HistoryError(
            f"Listening history needs at least two songs to build transitions (got {len(history)})"
        )

    table: TransitionTable = {}
    for current, following in zip(history, history[1:]):
        row = table.setdefault(current, {})
        row[following] = row.get(following, 0.0) + 1.0
    return table


def apply_creativity(table: TransitionTable, creativity: float) -> TransitionTable:
    """Pull each row toward its mean by ``mean * creativity``, in place.

    Only existing successors are reshaped; weights are floored at
    ``MIN_WEIGHT``. Returns the same table.
    """

    for row in table.values():
        if not row:
            continue
        mean = sum(row.values()) / len(row)
        shift = mean * creativity
        for song, weight in row.items():
            if weight < mean:
                weight += shift
            elif weight > mean:
                weight -= shift
            row[song] = max(weight, MIN_WEIGHT)
    return table
