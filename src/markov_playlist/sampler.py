from __future__ import annotations

import bisect
import random
from itertools import accumulate
from typing import Callable

from markov_playlist.models import Song, TransitionRow

LogSink = Callable[[str], None]


def format_weight(weight: float) -> str:
    """Shortest exact rendering; integral weights drop the trailing ".0"."""
    weight = float(weight)
    return str(int(weight)) if weight.is_integer() else repr(weight)


def weighted_choice(row: TransitionRow, rng: random.Random, log: LogSink | None = None) -> Song:
    """Draw one successor with probability proportional to its weight."""
    if not row:
        raise ValueError("Cannot choose from an empty transition row")

    songs = list(row)
    weights = [row[song] for song in songs]
    if any(weight < 0 for weight in weights):
        raise ValueError("Transition weights must not be negative")

    cumulative = list(accumulate(weights))
    total = cumulative[-1]
    if total <= 0:
        raise ValueError("Transition row has no positive weight")

    if log is not None:
        for song, weight in zip(songs, weights):
            log(f"\t\t{song.label} = {format_weight(weight)}")

    index = bisect.bisect_right(cumulative, rng.random() * total)
    return songs[min(index, len(songs) - 1)]
