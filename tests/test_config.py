"""Tests for configuration loading and path resolution."""

import io
import os
import tempfile
import unittest
import unittest.mock as mock
from pathlib import Path

from block_snapshot.config import agent_config
from block_snapshot.config.agent_config import load_config, sys_paths
from block_snapshot.paths import SysPaths

_CLEAN_ENV = {
    k: v for k, v in os.environ.items()
    if not k.startswith("BLOCK_SNAPSHOT_")
}


class ConfigTestCase(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        env = mock.patch.dict(os.environ, _CLEAN_ENV, clear=True)
        env.start()
        self.addCleanup(env.stop)
        default = mock.patch.object(agent_config, "_DEFAULT_CONFIG_PATH", self.tmp / "absent.yaml")
        default.start()
        self.addCleanup(default.stop)

    def tearDown(self):
        self._tmp.cleanup()

    def _write(self, text: str) -> Path:
        path = self.tmp / "config.yaml"
        path.write_text(text, encoding="utf-8")
        return path


class TestLoadConfig(ConfigTestCase):

    def test_defaults(self):
        config = load_config()
        self.assertEqual(config["chroot"], "/")
        self.assertEqual(config["output"], {"format": "text", "pretty": True})
        self.assertTrue(config["warnings"])
        self.assertNotIn("mode", config)

    def test_explicit_file_deep_merged(self):
        path = self._write("chroot: /mnt/image\noutput:\n  format: yaml\n")
        config = load_config(str(path))
        self.assertEqual(config["chroot"], "/mnt/image")
        self.assertEqual(config["output"], {"format": "yaml", "pretty": True})

    def test_defaults_not_mutated(self):
        load_config(str(self._write("paths:\n  etc_mtab: /proc/self/mounts\n")))
        self.assertIsNone(agent_config._DEFAULTS["paths"]["etc_mtab"])

    def test_explicit_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config(str(self.tmp / "nope.yaml"))

    def test_non_mapping_rejected(self):
        with self.assertRaises(ValueError):
            load_config(str(self._write("- just\n- a list\n")))

    def test_null_output_section_rejected(self):
        with self.assertRaisesRegex(ValueError, "output"):
            load_config(str(self._write("output: null\n")))

    def test_scalar_paths_section_rejected(self):
        with self.assertRaisesRegex(ValueError, "paths"):
            load_config(str(self._write("paths: 5\n")))

    def test_env_config_path(self):
        path = self._write("warnings: false\n")
        with mock.patch.dict(os.environ, {"BLOCK_SNAPSHOT_CONFIG": str(path)}):
            self.assertFalse(load_config()["warnings"])

    def test_env_config_missing_warns(self):
        with mock.patch.dict(os.environ, {"BLOCK_SNAPSHOT_CONFIG": str(self.tmp / "gone.yaml")}):
            with mock.patch("sys.stdout", new_callable=io.StringIO) as out:
                config = load_config()
        self.assertIn("points to missing file", out.getvalue())
        self.assertEqual(config["chroot"], "/")

    def test_env_overrides(self):
        env = {"BLOCK_SNAPSHOT_CHROOT": "/srv/root", "BLOCK_SNAPSHOT_DISABLE_WARNINGS": "1"}
        with mock.patch.dict(os.environ, env):
            config = load_config()
        self.assertEqual(config["chroot"], "/srv/root")
        self.assertFalse(config["warnings"])

    def test_disable_warnings_falsey_values(self):
        with mock.patch.dict(os.environ, {"BLOCK_SNAPSHOT_DISABLE_WARNINGS": "no"}):
            self.assertTrue(load_config()["warnings"])


class TestSysPaths(ConfigTestCase):

    def test_from_root(self):
        paths = SysPaths.from_root("/mnt/image")
        self.assertEqual(paths.sys_block, Path("/mnt/image/sys/block"))
        self.assertEqual(paths.run_udev_data, Path("/mnt/image/run/udev/data"))
        self.assertEqual(paths.etc_mtab, Path("/mnt/image/etc/mtab"))

    def test_overrides_from_config(self):
        config = load_config(str(self._write("paths:\n  etc_mtab: /proc/self/mounts\n")))
        paths = sys_paths(config)
        self.assertEqual(paths.etc_mtab, Path("/proc/self/mounts"))
        self.assertEqual(paths.sys_block, Path("/sys/block"))

    def test_unknown_override_rejected(self):
        with self.assertRaises(ValueError):
            SysPaths.from_root("/", proc_mounts="/proc/mounts")
