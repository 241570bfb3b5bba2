import os
import tempfile
import unittest

from config import Config, TLBLevelConfig, PageTableConfig, MemoryConfig, is_power_of_two, safe_log_2

SAMPLE_CONFIG = """\
L1 TLB configuration
Number of entries: 8
Access latency: 2

L2 TLB configuration
Number of entries: 32
Access latency: 6

Page Table configuration
Number of virtual pages: 256
Number of physical pages: 32
Page size: 4096
Walk latency: 120
Disk latency: 9000

Main Memory configuration
Access latency: 80
"""


class TestConfigFile(unittest.TestCase):

    def write_config(self, text):
        fd, path = tempfile.mkstemp(suffix=".config")
        with os.fdopen(fd, "w") as f:
            f.write(text)
        self.addCleanup(os.remove, path)
        return path

    def test_parse_sample(self):
        config = Config.from_config_file(self.write_config(SAMPLE_CONFIG))
        self.assertEqual(config.l1.num_entries, 8)
        self.assertEqual(config.l1.latency, 2)
        self.assertEqual(config.l2.num_entries, 32)
        self.assertEqual(config.l2.latency, 6)
        self.assertEqual(config.pt.walk_latency, 120)
        self.assertEqual(config.pt.disk_latency, 9000)
        self.assertEqual(config.mem.latency, 80)
        self.assertEqual(config.bits.page_offset_bits, 12)
        self.assertEqual(config.bits.vpn_bits, 8)
        self.assertEqual(config.bits.ppn_bits, 5)
        self.assertEqual(config.address_bits, 20)
        self.assertIn("L1 TLB contains 8 entries", str(config))

    def test_missing_sections_use_defaults(self):
        config = Config.from_config_file(self.write_config("L1 TLB configuration\nNumber of entries: 2\n"))
        self.assertEqual(config.l1.num_entries, 2)
        self.assertEqual(config.l2.num_entries, 64)
        self.assertEqual(config.pt.page_size, 4096)

    def test_bad_value(self):
        path = self.write_config("L1 TLB configuration\nNumber of entries: lots\n")
        with self.assertRaises(ValueError):
            Config.from_config_file(path)

    def test_unknown_line(self):
        with self.assertRaises(ValueError):
            Config.from_config_file(self.write_config("Number of entries: 4\n"))

    def test_repo_sample_config_loads(self):
        root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        config = Config.from_config_file(os.path.join(root, "trace.config"))
        self.assertEqual(config.address_bits, 14)


class TestValidation(unittest.TestCase):

    def build(self, l1=4, l2=16, n_virtual_pages=64, n_physical_pages=16, page_size=256, latency=1):
        return Config(TLBLevelConfig(l1, latency), TLBLevelConfig(l2, latency),
                      PageTableConfig(n_virtual_pages, n_physical_pages, page_size), MemoryConfig())

    def test_valid(self):
        self.assertEqual(self.build().address_bits, 14)

    def test_rejects_bad_sizes(self):
        bad = [
            dict(l1=0),
            dict(l1=65, l2=128),
            dict(l2=2048),
            dict(l1=8, l2=4),
            dict(latency=-1),
            dict(n_virtual_pages=48),
            dict(n_physical_pages=3),
            dict(page_size=1000),
            dict(n_virtual_pages=2**20, page_size=2**13),
        ]
        for kwargs in bad:
            with self.subTest(**kwargs):
                with self.assertRaises(ValueError):
                    self.build(**kwargs)

    def test_power_of_two_helpers(self):
        self.assertTrue(is_power_of_two(1))
        self.assertTrue(is_power_of_two(4096))
        self.assertFalse(is_power_of_two(0))
        self.assertFalse(is_power_of_two(12))
        self.assertEqual(safe_log_2(256), 8)
        with self.assertRaises(ValueError):
            safe_log_2(100)


if __name__ == '__main__':
    unittest.main()
