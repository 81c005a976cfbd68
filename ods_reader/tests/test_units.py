"""Unit tests for length, font-size and color literal parsing."""
import unittest

from ods_reader.model.elements import Rgba
from ods_reader.utils.colors import parse_hex_color
from ods_reader.utils.errors import AttributeFormatError, ErrorKind
from ods_reader.utils.units import size_to_points, to_mm


class ToMillimetresTest(unittest.TestCase):
    """Length literals are converted from cm and pt."""

    def test_centimetres(self) -> None:
        self.assertEqual(to_mm("2cm"), 20.0)
        self.assertAlmostEqual(to_mm("2.258cm"), 22.58)
        self.assertAlmostEqual(to_mm("-0.5cm"), -5.0)

    def test_points(self) -> None:
        self.assertAlmostEqual(to_mm("72pt"), 25.4, delta=1e-6)
        self.assertAlmostEqual(to_mm("1pt"), 0.3527777778)

    def test_empty_literal_is_zero(self) -> None:
        self.assertEqual(to_mm(""), 0.0)
        self.assertEqual(to_mm(None), 0.0)

    def test_unknown_unit_is_an_error(self) -> None:
        with self.assertRaises(AttributeFormatError) as ctx:
            to_mm("5in")
        self.assertEqual(ctx.exception.kind, ErrorKind.UNIT)
        self.assertEqual(ctx.exception.literal, "5in")
        self.assertIn("5in", str(ctx.exception))

    def test_malformed_number_is_an_error(self) -> None:
        for literal in ("abccm", "cm", "1,5cm", "1.2.3pt", "x"):
            with self.assertRaises(AttributeFormatError, msg=literal):
                to_mm(literal)

    def test_errors_are_value_errors(self) -> None:
        with self.assertRaises(ValueError):
            to_mm("3mm")


class FontSizeTest(unittest.TestCase):
    """Font sizes are parsed into points."""

    def test_point_suffix_is_stripped(self) -> None:
        self.assertEqual(size_to_points("10pt"), 10.0)
        self.assertEqual(size_to_points("10.5pt"), 10.5)

    def test_bare_number(self) -> None:
        self.assertEqual(size_to_points("12"), 12.0)

    def test_empty_literal_is_zero(self) -> None:
        self.assertEqual(size_to_points(""), 0.0)

    def test_malformed_size(self) -> None:
        with self.assertRaises(AttributeFormatError) as ctx:
            size_to_points("120%")
        self.assertEqual(ctx.exception.kind, ErrorKind.SIZE)


class HexColorTest(unittest.TestCase):
    """Hex color literals become opaque RGBA values."""

    def test_long_form(self) -> None:
        self.assertEqual(parse_hex_color("#ff0000"), Rgba(255, 0, 0, 255))
        self.assertEqual(parse_hex_color("#0a0B0c"), (10, 11, 12, 255))

    def test_short_form_duplicates_nibbles(self) -> None:
        self.assertEqual(parse_hex_color("#f00"), (255, 0, 0, 255))
        self.assertEqual(parse_hex_color("#abc"), (0xAA, 0xBB, 0xCC, 255))

    def test_unspecified_color(self) -> None:
        self.assertEqual(parse_hex_color(""), Rgba(0, 0, 0, 255))
        self.assertEqual(parse_hex_color(None), Rgba(0, 0, 0, 255))
        self.assertEqual(parse_hex_color("#1"), Rgba(0, 0, 0, 255))

    def test_invalid_literals(self) -> None:
        for literal in ("bad", "ff0000", "#12345", "#gg0000", "#ff00001"):
            with self.assertRaises(AttributeFormatError, msg=literal) as ctx:
                parse_hex_color(literal)
            self.assertEqual(ctx.exception.kind, ErrorKind.COLOR)

    def test_channels_are_named(self) -> None:
        color = parse_hex_color("#102030")
        self.assertEqual((color.r, color.g, color.b, color.a), (16, 32, 48, 255))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
