from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Song:
    track: str
    artist: str
    album: str

    @property
    def label(self) -> str:
        return f"{self.artist} - {self.track}"


@dataclass(frozen=True, slots=True)
class PlaylistEntry:
    position: int
    song: Song


# from-song -> (to-song -> unnormalized weight)
TransitionRow = dict[Song, float]
TransitionTable = dict[Song, TransitionRow]
