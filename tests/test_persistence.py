"""Tests for the persisted snapshot codec, the durable stores and settings.

Covers: sw.core.snapshot, sw.core.store, sw.core.config
"""

import json
import os
import shutil
import tempfile
import unittest
from pathlib import Path

# Keep logs and state out of the real user profile.
os.environ.setdefault("STOPWATCH_HOME", tempfile.mkdtemp(prefix="stopwatch_tests_"))

from sw.core import config
from sw.core.snapshot import (
    PersistedSnapshot,
    SnapshotDecodeError,
    decode_snapshot,
    encode_snapshot,
    parse_snapshot,
)
from sw.core.store import JsonFileStore, MemoryStore


def _valid_record(**overrides):
    record = {
        "elapsedMs": "65400",
        "isRunning": "true",
        "startReference": "1700000000000",
        "laps": json.dumps(["00:00:10.000", "00:00:20.500"]),
        "theme": "dark",
    }
    record.update(overrides)
    return record


# ──────────────────────────────────────────────────────────────────────────
# snapshot.py tests
# ──────────────────────────────────────────────────────────────────────────

class TestSnapshotCodec(unittest.TestCase):

    def test_encode_writes_only_strings(self):
        record = encode_snapshot(PersistedSnapshot(
            elapsed_ms=1500, running=False, reference_instant=42,
            laps=("00:00:01.000",), theme="light",
        ))
        self.assertEqual(record, {
            "elapsedMs": "1500",
            "isRunning": "false",
            "startReference": "42",
            "laps": '["00:00:01.000"]',
            "theme": "light",
        })

    def test_parse_valid_record(self):
        snap = parse_snapshot(_valid_record())
        self.assertEqual(snap.elapsed_ms, 65_400)
        self.assertTrue(snap.running)
        self.assertEqual(snap.reference_instant, 1_700_000_000_000)
        self.assertEqual(snap.laps, ("00:00:10.000", "00:00:20.500"))
        self.assertEqual(snap.theme, "dark")

    def test_parse_accepts_negative_reference(self):
        snap = parse_snapshot(_valid_record(startReference="-250"))
        self.assertEqual(snap.reference_instant, -250)

    def test_parse_rejects_bad_fields(self):
        bad_records = [
            _valid_record(elapsedMs="-5"),
            _valid_record(elapsedMs="12.5"),
            _valid_record(elapsedMs="abc"),
            _valid_record(isRunning="yes"),
            _valid_record(startReference=""),
            _valid_record(laps="not json"),
            _valid_record(laps="[1, 2]"),
            _valid_record(laps='{"a": "b"}'),
            _valid_record(theme="blue"),
            _valid_record(elapsedMs=100),
            _valid_record(elapsedMs="9" * 5000),
            _valid_record(startReference="-" + "1" * 5000),
            _valid_record(laps="[" * 100_000 + "]" * 100_000),
        ]
        for record in bad_records:
            with self.subTest(record=record):
                with self.assertRaises(SnapshotDecodeError):
                    parse_snapshot(record)

    def test_parse_rejects_missing_key(self):
        record = _valid_record()
        del record["theme"]
        with self.assertRaises(SnapshotDecodeError):
            parse_snapshot(record)

    def test_parse_rejects_non_dict(self):
        with self.assertRaises(SnapshotDecodeError):
            parse_snapshot(["elapsedMs", "0"])

    def test_decode_discards_whole_record_on_one_bad_field(self):
        with self.assertLogs("stopwatch", level="WARNING"):
            self.assertIsNone(decode_snapshot(_valid_record(isRunning="maybe")))

    def test_decode_none_is_none(self):
        self.assertIsNone(decode_snapshot(None))


# ──────────────────────────────────────────────────────────────────────────
# store.py tests
# ──────────────────────────────────────────────────────────────────────────

class TestStores(unittest.TestCase):

    def setUp(self):
        self.tmpdir = Path(tempfile.mkdtemp())
        self.path = self.tmpdir / "state.json"

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def test_json_store_save_and_load(self):
        store = JsonFileStore(self.path)
        snap = PersistedSnapshot(elapsed_ms=9001, running=True, reference_instant=123,
                                 laps=("00:00:09.001",), theme="dark")
        store.save(snap)
        self.assertEqual(store.load(), snap)

        with open(self.path, "r", encoding="utf-8") as f:
            on_disk = json.load(f)
        self.assertTrue(all(isinstance(v, str) for v in on_disk.values()))
        self.assertEqual(on_disk["isRunning"], "true")
        self.assertFalse(self.path.with_name("state.json.tmp").exists())

    def test_json_store_last_write_wins(self):
        store = JsonFileStore(self.path)
        store.save(PersistedSnapshot(elapsed_ms=1))
        store.save(PersistedSnapshot(elapsed_ms=2))
        self.assertEqual(store.load().elapsed_ms, 2)

    def test_json_store_missing_file(self):
        self.assertIsNone(JsonFileStore(self.path).load())

    def test_json_store_corrupt_file(self):
        self.path.write_text("{invalid json!!", encoding="utf-8")
        with self.assertLogs("stopwatch", level="WARNING"):
            self.assertIsNone(JsonFileStore(self.path).load())

    def test_json_store_deeply_nested_file(self):
        self.path.write_text("[" * 100_000 + "]" * 100_000, encoding="utf-8")
        with self.assertLogs("stopwatch", level="WARNING"):
            self.assertIsNone(JsonFileStore(self.path).load())

    def test_json_store_partial_record(self):
        self.path.write_text(json.dumps({"elapsedMs": "100"}), encoding="utf-8")
        self.assertIsNone(JsonFileStore(self.path).load())

    def test_json_store_write_failure_is_swallowed(self):
        store = JsonFileStore(self.tmpdir / "missing_dir" / "state.json")
        with self.assertLogs("stopwatch", level="WARNING"):
            store.save(PersistedSnapshot(elapsed_ms=5))

    def test_memory_store_write_failure_is_swallowed(self):
        class BrokenStore(MemoryStore):
            def _write_record(self, record):
                raise OSError("disk full")

        store = BrokenStore()
        with self.assertLogs("stopwatch", level="WARNING"):
            store.save(PersistedSnapshot())
        self.assertIsNone(store.load())

    def test_memory_store_roundtrip(self):
        store = MemoryStore()
        self.assertIsNone(store.load())
        store.save(PersistedSnapshot(elapsed_ms=77, theme="dark"))
        self.assertEqual(store.writes, 1)
        self.assertEqual(store.load().elapsed_ms, 77)


# ──────────────────────────────────────────────────────────────────────────
# config.py tests
# ──────────────────────────────────────────────────────────────────────────

class TestSettings(unittest.TestCase):

    def setUp(self):
        self.tmpdir = Path(tempfile.mkdtemp())
        self.path = self.tmpdir / "settings.json"

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def _write(self, payload):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(payload if isinstance(payload, str) else json.dumps(payload))

    def test_missing_file_gives_defaults(self):
        settings = config.load_settings(self.path)
        self.assertEqual(settings, config.build_default_settings())
        self.assertEqual(settings.tick_interval_ms, 10)
        self.assertFalse(settings.allow_lap_while_paused)
        self.assertEqual(settings.default_theme, "light")
        self.assertEqual(settings.log_level, "INFO")

    def test_first_run_writes_default_file(self):
        self.assertFalse(self.path.exists())
        config.load_settings(self.path)
        with open(self.path, "r", encoding="utf-8") as f:
            on_disk = json.load(f)
        self.assertEqual(on_disk["tick_interval_ms"], 10)
        self.assertEqual(on_disk["log_to_console"], False)
        self.assertEqual(config.load_settings(self.path), config.build_default_settings())

    def test_first_run_unwritable_dir_gives_defaults(self):
        missing = self.tmpdir / "no_such_dir" / "settings.json"
        with self.assertLogs("stopwatch", level="WARNING"):
            settings = config.load_settings(missing)
        self.assertEqual(settings, config.build_default_settings())

    def test_log_level_is_validated(self):
        self._write({"log_level": "debug", "log_to_console": True})
        settings = config.load_settings(self.path)
        self.assertEqual(settings.log_level, "DEBUG")
        self.assertTrue(settings.log_to_console)

        self._write({"log_level": "chatty"})
        with self.assertLogs("stopwatch", level="WARNING"):
            self.assertEqual(config.load_settings(self.path).log_level, "INFO")

    def test_partial_file_fills_defaults(self):
        self._write({"allow_lap_while_paused": True})
        settings = config.load_settings(self.path)
        self.assertTrue(settings.allow_lap_while_paused)
        self.assertEqual(settings.persist_every_n_ticks, 1)

    def test_wrong_types_are_defaulted(self):
        self._write({"tick_interval_ms": "fast", "allow_lap_while_paused": 1, "default_theme": "neon"})
        with self.assertLogs("stopwatch", level="WARNING"):
            settings = config.load_settings(self.path)
        self.assertEqual(settings.tick_interval_ms, 10)
        self.assertFalse(settings.allow_lap_while_paused)
        self.assertEqual(settings.default_theme, "light")

    def test_tick_interval_is_clamped(self):
        self._write({"tick_interval_ms": 0, "persist_every_n_ticks": -3})
        settings = config.load_settings(self.path)
        self.assertEqual(settings.tick_interval_ms, 1)
        self.assertEqual(settings.persist_every_n_ticks, 1)

        self._write({"tick_interval_ms": 60_000})
        self.assertEqual(config.load_settings(self.path).tick_interval_ms, 1000)

    def test_corrupt_file_gives_defaults(self):
        self._write("{nope")
        with self.assertLogs("stopwatch", level="WARNING"):
            settings = config.load_settings(self.path)
        self.assertEqual(settings, config.build_default_settings())

    def test_non_object_file_gives_defaults(self):
        self._write([1, 2, 3])
        self.assertEqual(config.load_settings(self.path), config.build_default_settings())

    def test_save_and_load_roundtrip(self):
        settings = config.Settings(tick_interval_ms=33, allow_lap_while_paused=True,
                                   persist_every_n_ticks=4, default_theme="dark")
        config.save_settings(settings, self.path)
        self.assertEqual(config.load_settings(self.path), settings)


if __name__ == "__main__":
    unittest.main()
