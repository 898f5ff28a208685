from __future__ import annotations

import argparse
import random
import sys
from typing import Sequence

from markov_playlist.chain import apply_creativity, build_transitions
from markov_playlist.config import (
    env_creativity,
    env_length,
    env_seed,
    load_local_env_file,
    parse_creativity,
    parse_length,
    parse_seed,
)
from markov_playlist.history import HistoryError, read_history
from markov_playlist.sampler import LogSink, format_weight
from markov_playlist.walk import format_entry, iter_playlist

__version__ = "0.1.0"


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="markov-playlist",
        description="Uses a modified Markov chain to generate a playlist based on Last.fm listening history",
    )
    parser.add_argument("input", metavar="INPUT", help="Sets the input file to use")
    # Kept as raw strings: bad values fall back to the defaults instead of erroring.
    parser.add_argument(
        "-l",
        "--length",
        help="Sets the number of songs in the generated playlist (defaults to PLAYLIST_LENGTH env or 20)",
    )
    parser.add_argument(
        "-c",
        "--creativity",
        help="Sets the playlist generation creativity (defaults to PLAYLIST_CREATIVITY env or 0)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Prints verbose information on song probabilities. Useful for fine-tuning creativity",
    )
    parser.add_argument("--seed", help="Random seed for reproducible playlists (defaults to PLAYLIST_SEED env)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args(argv)
    args.length = parse_length(args.length, env_length())
    args.creativity = parse_creativity(args.creativity, env_creativity())
    args.seed = parse_seed(args.seed) if args.seed is not None else env_seed()
    return args


def run(args: argparse.Namespace, out: LogSink = print, rng: random.Random | None = None) -> int:
    """Build the chain from ``args.input`` and emit the playlist. Returns the exit code."""
    if args.verbose:
        out(
            f"Using input file {args.input}\n"
            f"Using playlist length {args.length}\n"
            f"Using creativity {format_weight(args.creativity)}\n"
        )

    try:
        handle = open(args.input, newline="", encoding="utf-8-sig")
    except OSError:
        out(f"Failed to open input file {args.input}")
        return 1

    with handle:
        try:
            table = build_transitions(read_history(handle))
        except HistoryError as exc:
            out(str(exc))
            return 1

    apply_creativity(table, args.creativity)

    if rng is None:
        rng = random.Random(args.seed)
    log = out if args.verbose else None
    for entry in iter_playlist(table, args.length, rng, log=log):
        out(format_entry(entry))
    return 0


def main() -> None:
    load_local_env_file()
    sys.exit(run(parse_args()))


if __name__ == "__main__":
    main()
