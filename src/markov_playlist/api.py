"""FastAPI web server for Markov playlist generation."""
import random

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from markov_playlist.chain import apply_creativity, build_transitions
from markov_playlist.config import DEFAULT_CREATIVITY, DEFAULT_LENGTH
from markov_playlist.history import HistoryError, history_from_recent
from markov_playlist.lastfm import LastfmClient, LastfmError, history_from_lastfm
from markov_playlist.models import Song
from markov_playlist.walk import generate_playlist

app = FastAPI(title="Markov Playlist")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class SongIn(BaseModel):
    track: str
    artist: str
    album: str


class PlaylistRequest(BaseModel):
    """Listening history, most recent play first, plus walk settings."""
    history: list[SongIn]
    length: int = Field(default=DEFAULT_LENGTH, ge=1)
    creativity: float = Field(default=DEFAULT_CREATIVITY, ge=0.0)
    seed: int | None = None


class LastfmPlaylistRequest(BaseModel):
    """Build the history from a Last.fm user's scrobbles."""
    username: str = Field(min_length=1)
    scrobbles: int = Field(default=1000, ge=2)
    length: int = Field(default=DEFAULT_LENGTH, ge=1)
    creativity: float = Field(default=DEFAULT_CREATIVITY, ge=0.0)
    seed: int | None = None


class PlaylistTrack(BaseModel):
    position: int
    track: str
    artist: str
    album: str


class PlaylistResponse(BaseModel):
    tracks: list[PlaylistTrack]


def get_lastfm_client() -> LastfmClient:
    """Initialize Last.fm client."""
    return LastfmClient.from_env()


def _build_playlist(history: list[Song], length: int, creativity: float, seed: int | None) -> PlaylistResponse:
    table = apply_creativity(build_transitions(history), creativity)
    entries = generate_playlist(table, length, random.Random(seed))
    return PlaylistResponse(
        tracks=[
            PlaylistTrack(
                position=entry.position,
                track=entry.song.track,
                artist=entry.song.artist,
                album=entry.song.album,
            )
            for entry in entries
        ]
    )


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


@app.post("/api/playlist", response_model=PlaylistResponse)
def playlist_from_history(request: PlaylistRequest):
    """Generate a playlist from a submitted newest-first history."""
    history = history_from_recent(
        Song(track=item.track, artist=item.artist, album=item.album) for item in request.history
    )
    try:
        return _build_playlist(history, request.length, request.creativity, request.seed)
    except HistoryError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/api/playlist/lastfm", response_model=PlaylistResponse)
def playlist_from_lastfm(request: LastfmPlaylistRequest):
    """Fetch a user's recent scrobbles from Last.fm and walk them."""
    try:
        client = get_lastfm_client()
        history = history_from_lastfm(client, request.username, limit=request.scrobbles)
        return _build_playlist(history, request.length, request.creativity, request.seed)
    except HistoryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LastfmError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e))
