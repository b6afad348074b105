import json
import os
import tempfile
import unittest
from pathlib import Path

from NTE.NCM.config_store import (
    ConfigStore,
    ConfigAccessError,
    ConfigNotFoundError,
    ConfigFormatError,
    ConfigRequestError,
)


class ConfigStoreTests(unittest.TestCase):
    def setUp(self):
        self._td = tempfile.TemporaryDirectory()
        self.base = Path(self._td.name).resolve()
        self.root = self.base / "brain-viz" / "public" / "data"
        self.root.mkdir(parents=True)
        self.store = ConfigStore(self.root)

    def tearDown(self):
        self._td.cleanup()

    def test_save_then_load(self):
        saved = self.store.save("analyzer_config.json", '{"updateInterval": 1500}')
        self.assertEqual(saved["message"], "Configuration saved successfully")
        loaded = self.store.load("analyzer_config.json")
        self.assertEqual(loaded["config"], {"updateInterval": 1500})
        self.assertIn("timestamp", loaded)

    def test_default_path(self):
        (self.root / "analyzer_config.json").write_text('{"a": 1}', encoding="utf-8")
        self.assertEqual(self.store.load(None)["config"], {"a": 1})
        self.assertEqual(self.store.load("")["config"], {"a": 1})

    def test_absolute_path_inside_root(self):
        target = self.root / "nested" / "cfg.json"
        self.store.save(str(target), '{"b": 2}')
        self.assertEqual(json.loads(target.read_text(encoding="utf-8")), {"b": 2})

    def test_save_creates_parents_and_writes_verbatim(self):
        content = '{\n  "x": 1\n}\n'
        self.store.save("deep/er/cfg.json", content)
        self.assertEqual((self.root / "deep" / "er" / "cfg.json").read_text(encoding="utf-8"), content)

    def test_last_writer_wins(self):
        self.store.save("cfg.json", '{"v": 1}')
        self.store.save("cfg.json", '{"v": 2}')
        self.assertEqual(self.store.load("cfg.json")["config"], {"v": 2})

    def test_dotdot_escape_rejected_for_read_and_write(self):
        with self.assertRaises(ConfigAccessError) as ctx:
            self.store.load("../../outside.json")
        self.assertEqual(ctx.exception.status, 403)
        with self.assertRaises(ConfigAccessError):
            self.store.save("../../outside.json", "{}")
        self.assertFalse((self.base / "brain-viz" / "outside.json").exists())

    def test_substring_lookalike_rejected(self):
        sibling = self.base / "brain-viz" / "public" / "data-evil" / "cfg.json"
        with self.assertRaises(ConfigAccessError):
            self.store.save(str(sibling), "{}")
        with self.assertRaises(ConfigAccessError):
            self.store.load(str(sibling))

    def test_absolute_path_outside_rejected(self):
        with self.assertRaises(ConfigAccessError):
            self.store.load(str(self.base / "brain-viz" / "cfg.json"))

    @unittest.skipUnless(hasattr(os, "symlink"), "symlinks not supported")
    def test_symlink_escape_rejected(self):
        outside = self.base / "outside"
        outside.mkdir()
        (outside / "cfg.json").write_text("{}", encoding="utf-8")
        try:
            os.symlink(outside, self.root / "link")
        except OSError:
            self.skipTest("cannot create symlink")
        with self.assertRaises(ConfigAccessError):
            self.store.load("link/cfg.json")

    def test_missing_file(self):
        with self.assertRaises(ConfigNotFoundError) as ctx:
            self.store.load("nope.json")
        self.assertEqual(ctx.exception.status, 404)

    def test_invalid_json(self):
        (self.root / "bad.json").write_text("{not json", encoding="utf-8")
        with self.assertRaises(ConfigFormatError) as ctx:
            self.store.load("bad.json")
        self.assertEqual(ctx.exception.status, 500)

    def test_save_requires_path_and_content(self):
        for path, content in [("", "{}"), ("cfg.json", ""), ("cfg.json", None), ("cfg.json", {"a": 1})]:
            with self.assertRaises(ConfigRequestError) as ctx:
                self.store.save(path, content)
            self.assertEqual(ctx.exception.status, 400)

    def test_invalid_path_types_rejected(self):
        for path in (5, ["cfg.json"], {"a": 1}, "a\x00b.json"):
            with self.assertRaises(ConfigRequestError):
                self.store.save(path, "{}")
            with self.assertRaises(ConfigRequestError):
                self.store.load(path)

    def test_reported_paths_are_relative_to_root(self):
        saved = self.store.save(str(self.root / "sub" / "cfg.json"), "{}")
        self.assertEqual(saved["path"], "sub/cfg.json")
        self.assertEqual(self.store.load("sub/cfg.json")["path"], "sub/cfg.json")
        with self.assertRaises(ConfigNotFoundError) as ctx:
            self.store.load("nope.json")
        self.assertEqual(ctx.exception.to_dict()["path"], "nope.json")
        self.assertNotIn(str(self.root), ctx.exception.to_dict()["path"])


if __name__ == "__main__":
    unittest.main()
