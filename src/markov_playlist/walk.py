from __future__ import annotations

import random
from typing import Iterator

from markov_playlist.models import PlaylistEntry, Song, TransitionTable
from markov_playlist.sampler import LogSink, weighted_choice


def random_song(table: TransitionTable, rng: random.Random) -> Song:
    """Uniform pick among songs that have at least one recorded successor."""
    if not table:
        raise ValueError("Transition table is empty")
    return rng.choice(list(table))


def predict_next(
    table: TransitionTable,
    current: Song,
    rng: random.Random,
    log: LogSink | None = None,
) -> Song:
    row = table.get(current)
    if row:
        return weighted_choice(row, rng, log=log)
    # Dead end: restart silently so the playlist always reaches its length.
    return random_song(table, rng)


def iter_playlist(
    table: TransitionTable,
    length: int,
    rng: random.Random,
    log: LogSink | None = None,
) -> Iterator[PlaylistEntry]:
    """Yield entries one at a time so verbose weights interleave with output."""
    if length < 1:
        raise ValueError(f"Playlist length must be at least 1 (got {length})")

    current = random_song(table, rng)
    yield PlaylistEntry(position=1, song=current)
    for position in range(2, length + 1):
        current = predict_next(table, current, rng, log=log)
        yield PlaylistEntry(position=position, song=current)


def generate_playlist(
    table: TransitionTable,
    length: int,
    rng: random.Random,
    log: LogSink | None = None,
) -> list[PlaylistEntry]:
    return list(iter_playlist(table, length, rng, log=log))


def format_entry(entry: PlaylistEntry) -> str:
    return f"{entry.position}.\t{entry.song.label}"
