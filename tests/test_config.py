import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from markov_playlist.config import (
    MAX_LENGTH,
    env_creativity,
    env_length,
    env_seed,
    load_local_env_file,
    parse_creativity,
    parse_length,
    parse_seed,
)


class LoadLocalEnvFileTests(unittest.TestCase):
    def test_loads_missing_values_only(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            env_path = Path(tmpdir) / ".env"
            env_path.write_text(
                """
# comment
LASTFM_API_KEY="test-key"
export PLAYLIST_LENGTH=30
KEEP_ME=from_file
not a pair
                """.strip(),
                encoding="utf-8",
            )

            with patch.dict(os.environ, {"KEEP_ME": "existing"}, clear=True):
                loaded = load_local_env_file(str(env_path))
                self.assertEqual(os.environ.get("LASTFM_API_KEY"), "test-key")
                self.assertEqual(os.environ.get("PLAYLIST_LENGTH"), "30")
                self.assertEqual(os.environ.get("KEEP_ME"), "existing")
                self.assertEqual(loaded, ["LASTFM_API_KEY", "PLAYLIST_LENGTH"])

    def test_missing_file_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            self.assertEqual(load_local_env_file(str(Path(tmpdir) / ".env")), [])


class ParseLengthTests(unittest.TestCase):
    def test_valid_values(self) -> None:
        self.assertEqual(parse_length("1", 20), 1)
        self.assertEqual(parse_length(" 42 ", 20), 42)
        self.assertEqual(parse_length("2147483647", 20), MAX_LENGTH)

    def test_invalid_values_fall_back(self) -> None:
        for raw in (None, "", "foo", "2.5", "0", "-3", "2147483648", "99999999999"):
            with self.subTest(raw=raw):
                self.assertEqual(parse_length(raw, 20), 20)


class ParseCreativityTests(unittest.TestCase):
    def test_valid_values(self) -> None:
        self.assertEqual(parse_creativity("0.75", 0.0), 0.75)
        self.assertEqual(parse_creativity("3", 0.0), 3.0)
        self.assertEqual(parse_creativity("0", 0.5), 0.0)

    def test_invalid_values_fall_back(self) -> None:
        for raw in (None, "", "bar", "-0.5", "nan", "inf"):
            with self.subTest(raw=raw):
                self.assertEqual(parse_creativity(raw, 0.0), 0.0)


class ParseSeedTests(unittest.TestCase):
    def test_seed_parsing(self) -> None:
        self.assertEqual(parse_seed("17"), 17)
        self.assertIsNone(parse_seed("seventeen"))
        self.assertIsNone(parse_seed(None))


class EnvDefaultsTests(unittest.TestCase):
    def test_env_values_are_used_when_valid(self) -> None:
        env = {"PLAYLIST_LENGTH": "12", "PLAYLIST_CREATIVITY": "0.4", "PLAYLIST_SEED": "5"}
        with patch.dict(os.environ, env, clear=True):
            self.assertEqual(env_length(), 12)
            self.assertEqual(env_creativity(), 0.4)
            self.assertEqual(env_seed(), 5)

    def test_env_values_fall_back_when_invalid_or_missing(self) -> None:
        with patch.dict(os.environ, {"PLAYLIST_LENGTH": "many"}, clear=True):
            self.assertEqual(env_length(), 20)
            self.assertEqual(env_creativity(), 0.0)
            self.assertIsNone(env_seed())


if __name__ == "__main__":
    unittest.main()
