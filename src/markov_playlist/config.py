from __future__ import annotations

import math
import os
from pathlib import Path

DEFAULT_LENGTH = 20
DEFAULT_CREATIVITY = 0.0
MAX_LENGTH = 2**31 - 1


def load_local_env_file(env_path: str = ".env") -> list[str]:
    """Copy KEY=value lines from a local .env file into ``os.environ``.

    Variables already present in the environment win. Returns the keys that
    were set from the file.
    """

    path = Path(env_path)
    if not path.is_file():
        return []

    loaded: list[str] = []
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        if not line or line.startswith("#") or "=" not in line:
            continue

        key, value = (part.strip() for part in line.split("=", 1))
        value = value.strip('"').strip("'")
        if key and key not in os.environ:
            os.environ[key] = value
            loaded.append(key)
    return loaded


def parse_length(raw: str | None, fallback: int) -> int:
    """Lenient playlist length: anything but an integer in 1..MAX_LENGTH gives ``fallback``."""
    if raw is None or raw.strip() == "":
        return fallback
    try:
        value = int(raw)
    except ValueError:
        return fallback
    return value if 1 <= value <= MAX_LENGTH else fallback


def parse_creativity(raw: str | None, fallback: float) -> float:
    if raw is None or raw.strip() == "":
        return fallback
    try:
        value = float(raw)
    except ValueError:
        return fallback
    if not math.isfinite(value) or value < 0:
        return fallback
    return value


def parse_seed(raw: str | None) -> int | None:
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def env_length() -> int:
    return parse_length(os.getenv("PLAYLIST_LENGTH"), DEFAULT_LENGTH)


def env_creativity() -> float:
    return parse_creativity(os.getenv("PLAYLIST_CREATIVITY"), DEFAULT_CREATIVITY)


def env_seed() -> int | None:
    return parse_seed(os.getenv("PLAYLIST_SEED"))
