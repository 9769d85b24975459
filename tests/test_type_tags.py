import pathlib
import sys
import unittest

# Ensure src/ is on path for direct test execution
ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from emotibit_data.core.errors import UnrecognizedTagError  # noqa: E402
from emotibit_data.core.grammar import MIN_TOKENS, parse_token  # noqa: E402
from emotibit_data.core.type_tags import TYPE_TAGS, is_known, lookup  # noqa: E402


class TypeTagRegistryTest(unittest.TestCase):
    def test_lookup_known_tags(self):
        self.assertEqual(lookup("HR").value_kind, "int")
        self.assertEqual(lookup("PI").value_kind, "uint")
        self.assertEqual(lookup("EA").value_kind, "float")
        self.assertEqual(lookup("TL").value_kind, "text")
        self.assertEqual(lookup("B%").name, "battery percent")

    def test_unknown_tag_raises(self):
        with self.assertRaises(UnrecognizedTagError) as ctx:
            lookup("ZZ")
        self.assertEqual(ctx.exception.tag, "ZZ")
        self.assertFalse(is_known("hr"))

    def test_registry_is_read_only(self):
        with self.assertRaises(TypeError):
            TYPE_TAGS["ZZ"] = TYPE_TAGS["HR"]  # type: ignore[index]

    def test_all_tags_use_standard_reserved_layout(self):
        for info in TYPE_TAGS.values():
            self.assertEqual(info.reserved_count, 2, info.tag)
            self.assertEqual(
                [r.name for r in info.reserved], ["protocol_version", "data_reliability"]
            )
        self.assertEqual(MIN_TOKENS, 6)


class TokenParserTest(unittest.TestCase):
    def test_int_tokens(self):
        self.assertEqual(parse_token("-12", "int"), -12)
        self.assertEqual(parse_token("+7", "uint"), 7)
        for token in (" 1", "1 ", "1_0", "1.0", "", "١", "5\n"):
            with self.assertRaises(ValueError):
                parse_token(token, "int")

    def test_float_tokens(self):
        self.assertEqual(parse_token("2", "float"), 2.0)
        self.assertEqual(parse_token(".5", "float"), 0.5)
        self.assertEqual(parse_token("3.", "float"), 3.0)
        self.assertEqual(parse_token("-1.5E2", "float"), -150.0)
        for token in ("inf", "nan", "1e", " 0.5", "0,5"):
            with self.assertRaises(ValueError):
                parse_token(token, "float")

    def test_text_tokens_pass_through(self):
        self.assertEqual(parse_token(" spaced ", "text"), " spaced ")


if __name__ == "__main__":
    unittest.main()
