import pathlib
import sys
import tempfile
import unittest

# Ensure src/ is on path for direct test execution
ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from emotibit_data.config.runtime import ParserConfig, config_from_mapping, load_config  # noqa: E402


class ParserConfigTest(unittest.TestCase):
    def test_defaults_are_strict_and_sequential(self):
        cfg = ParserConfig()
        self.assertFalse(cfg.strip_tokens)
        self.assertTrue(cfg.split_tx)
        self.assertTrue(cfg.skip_blank_lines)
        self.assertEqual(cfg.workers, 1)
        self.assertEqual(cfg.parse_options(), {"strip_tokens": False, "split_tx": True})

    def test_nested_parser_block_and_unknown_keys(self):
        cfg = config_from_mapping(
            {"parser": {"strip_tokens": True, "workers": 4}, "plotting": {"fs": 50}}
        )
        self.assertTrue(cfg.strip_tokens)
        self.assertEqual(cfg.workers, 4)

    def test_sanitized_clamps_sizes(self):
        cfg = config_from_mapping({"workers": 0, "chunk_size": -5})
        self.assertEqual(cfg.workers, 1)
        self.assertEqual(cfg.chunk_size, 1)

    def test_empty_mapping_gives_defaults(self):
        self.assertEqual(config_from_mapping(None), ParserConfig())
        self.assertEqual(config_from_mapping({}), ParserConfig())

    def test_load_config_from_yaml(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "parser.yaml"
            path.write_text("parser:\n  split_tx: false\n  chunk_size: 64\n", encoding="utf-8")

            cfg = load_config(path)

            self.assertFalse(cfg.split_tx)
            self.assertEqual(cfg.chunk_size, 64)

    def test_load_config_missing_file_falls_back(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            self.assertEqual(load_config(pathlib.Path(tmpdir) / "absent.yaml"), ParserConfig())
        self.assertEqual(load_config(None), ParserConfig())

    def test_load_config_rejects_non_mapping(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "list.yaml"
            path.write_text("- 1\n- 2\n", encoding="utf-8")
            with self.assertRaisesRegex(ValueError, "Parser config .* must be a mapping"):
                load_config(path)

    def test_parser_block_overrides_top_level_keys(self):
        cfg = config_from_mapping({"parser": {"workers": 2}, "workers": 8, "chunk_size": 16})
        self.assertEqual(cfg.workers, 2)
        self.assertEqual(cfg.chunk_size, 16)


if __name__ == "__main__":
    unittest.main()
