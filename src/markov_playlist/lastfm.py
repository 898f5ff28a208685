from __future__ import annotations

import os
import time
import warnings
from typing import Callable

import requests
from requests.exceptions import ConnectionError, HTTPError, Timeout

from markov_playlist.history import history_from_recent
from markov_playlist.models import Song


class LastfmError(RuntimeError):
    """Raised when Last.fm rejects a request or keeps failing after retries."""


def parse_scrobble(item: dict) -> Song | None:
    """Convert one ``user.getrecenttracks`` item into a Song, or None if unusable."""
    track = item.get("name")
    artist = item.get("artist") or {}
    if isinstance(artist, dict):
        # Plain responses use "#text", extended=1 responses use "name".
        artist = artist.get("#text") or artist.get("name")
    album = item.get("album") or {}
    if isinstance(album, dict):
        album = album.get("#text", "")

    if not track or not artist:
        warnings.warn(
            f"Skipping Last.fm scrobble without track or artist: {item!r}",
            RuntimeWarning,
            stacklevel=2,
        )
        return None
    return Song(track=track, artist=artist, album=album or "")


class LastfmClient:
    BASE_URL = "https://ws.audioscrobbler.com/2.0/"

    # user.getrecenttracks never returns more than 200 scrobbles per page.
    PAGE_LIMIT = 200
    MAX_ATTEMPTS = 3

    def __init__(
        self,
        api_key: str,
        session: requests.Session | None = None,
        timeout: float = 10.0,
        backoff: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout
        self.backoff = backoff
        self._sleep = sleep

    @classmethod
    def from_env(cls) -> LastfmClient:
        api_key = os.getenv("LASTFM_API_KEY")
        if not api_key:
            raise ValueError(
                "Missing Last.fm credentials: LASTFM_API_KEY. "
                "Set it in environment variables or local .env file."
            )
        return cls(api_key)

    def _request(self, params: dict) -> dict:
        request_params = {"api_key": self.api_key, "format": "json", **params}

        for attempt in range(1, self.MAX_ATTEMPTS + 1):
            try:
                response = self.session.get(self.BASE_URL, params=request_params, timeout=self.timeout)
            except (ConnectionError, Timeout) as exc:
                reason = str(exc) or exc.__class__.__name__
            else:
                if response.status_code < 500:
                    return self._decode(response)
                reason = f"HTTP {response.status_code}"

            if attempt == self.MAX_ATTEMPTS:
                raise LastfmError(f"Last.fm request failed after {attempt} attempts: {reason}")
            delay = self.backoff * (2 ** (attempt - 1))
            warnings.warn(
                f"Last.fm request failed ({reason}, attempt {attempt}/{self.MAX_ATTEMPTS}). "
                f"Retrying in {delay:.1f}s.",
                RuntimeWarning,
                stacklevel=2,
            )
            self._sleep(delay)

        raise LastfmError("Last.fm request was never attempted")

    @staticmethod
    def _decode(response: requests.Response) -> dict:
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict) and "error" in payload:
            raise LastfmError(f"Last.fm error {payload['error']}: {payload.get('message', 'unknown error')}")
        try:
            response.raise_for_status()
        except HTTPError as exc:
            raise LastfmError(f"Last.fm returned HTTP {response.status_code}") from exc
        if not isinstance(payload, dict):
            raise LastfmError("Last.fm returned a response that is not a JSON object")
        return payload

    def recent_tracks(self, username: str, limit: int | None = None) -> list[Song]:
        """Return a user's scrobbles newest-first, like a CSV history export."""
        songs: list[Song] = []
        page = 1
        while limit is None or len(songs) < limit:
            payload = self._request(
                {
                    "method": "user.getrecenttracks",
                    "user": username,
                    "limit": self.PAGE_LIMIT,
                    "page": page,
                }
            )
            recent = payload.get("recenttracks", {})
            items = recent.get("track", [])
            if isinstance(items, dict):
                items = [items]
            if not items:
                break

            for item in items:
                if item.get("@attr", {}).get("nowplaying") == "true":
                    continue
                song = parse_scrobble(item)
                if song is not None:
                    songs.append(song)

            total_pages = int(recent.get("@attr", {}).get("totalPages", page))
            if page >= total_pages:
                break
            page += 1

        return songs if limit is None else songs[:limit]


def history_from_lastfm(client: LastfmClient, username: str, limit: int | None = None) -> list[Song]:
    return history_from_recent(client.recent_tracks(username, limit=limit))
