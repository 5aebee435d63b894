"""Tests for sysfs attribute readers."""

import tempfile
import unittest

from block_snapshot.collectors.linux import sysfs
from block_snapshot.models.schema import UNKNOWN

from fakesys import FakeHost

PCI_PATH = "pci0000:00/0000:00:1f.2/ata1/host0/target0:0:0/0:0:0:0"


class SysfsTestCase(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.host = FakeHost(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()


class TestNumericAttributes(SysfsTestCase):

    def test_size_in_sectors(self):
        disk_dir = self.host.add_disk("sda", size="2097152")
        self.assertEqual(sysfs.size_bytes(disk_dir), 2097152 * 512)

    def test_size_unreadable_or_malformed(self):
        self.assertEqual(sysfs.size_bytes(self.host.add_disk("sda", size=None)), 0)
        self.assertEqual(sysfs.size_bytes(self.host.add_disk("sdb", size="lots")), 0)

    def test_physical_block_size(self):
        self.assertEqual(sysfs.physical_block_size_bytes(self.host.add_disk("sda", block_size="4096")), 4096)
        self.assertEqual(sysfs.physical_block_size_bytes(self.host.add_disk("sdb", block_size=None)), 0)


class TestFlags(SysfsTestCase):

    def test_removable(self):
        self.assertTrue(sysfs.is_removable(self.host.add_disk("sda", removable="1")))
        self.assertFalse(sysfs.is_removable(self.host.add_disk("sdb", removable="0")))
        self.assertFalse(sysfs.is_removable(self.host.add_disk("sdc", removable=None)))
        self.assertFalse(sysfs.is_removable(self.host.add_disk("sdd", removable="yes")))

    def test_rotational(self):
        self.assertTrue(sysfs.is_rotational(self.host.add_disk("sda", rotational="1")))
        self.assertIs(sysfs.is_rotational(self.host.add_disk("sdb", rotational="0")), False)
        self.assertIs(sysfs.is_rotational(self.host.add_disk("sdc", rotational=None)), False)
        self.assertIs(sysfs.is_rotational(self.host.add_disk("sdd", rotational="garbage")), False)


class TestVendor(SysfsTestCase):

    def test_vendor_trimmed(self):
        self.assertEqual(sysfs.vendor(self.host.add_disk("sda", vendor="ATA     ")), "ATA")

    def test_vendor_missing(self):
        self.assertEqual(sysfs.vendor(self.host.add_disk("sda")), UNKNOWN)


class TestNumaNode(SysfsTestCase):

    def test_node_from_ancestor_device(self):
        self.host.add_disk("sda", device_path=PCI_PATH)
        (self.host.devices / "pci0000:00" / "0000:00:1f.2" / "numa_node").write_text("1\n")
        self.assertEqual(sysfs.numa_node_id(self.host.sys_block, "sda"), 1)

    def test_nearest_node_wins(self):
        self.host.add_disk("sda", device_path=PCI_PATH)
        (self.host.devices / "pci0000:00" / "numa_node").write_text("0\n")
        (self.host.devices / "pci0000:00" / "0000:00:1f.2" / "numa_node").write_text("3\n")
        self.assertEqual(sysfs.numa_node_id(self.host.sys_block, "sda"), 3)

    def test_unparseable_node_skipped(self):
        self.host.add_disk("sda", device_path=PCI_PATH)
        (self.host.devices / "pci0000:00" / "0000:00:1f.2" / "numa_node").write_text("n/a\n")
        (self.host.devices / "pci0000:00" / "numa_node").write_text("2\n")
        self.assertEqual(sysfs.numa_node_id(self.host.sys_block, "sda"), 2)

    def test_no_node_attribute(self):
        self.host.add_disk("sda", device_path=PCI_PATH)
        self.assertEqual(sysfs.numa_node_id(self.host.sys_block, "sda"), -1)

    def test_not_a_link(self):
        self.host.add_disk("sda")
        self.assertEqual(sysfs.numa_node_id(self.host.sys_block, "sda"), -1)

    def test_missing_device(self):
        self.assertEqual(sysfs.numa_node_id(self.host.sys_block, "sdz"), -1)
