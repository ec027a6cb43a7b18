"""Tests for CSV field parsing."""
import unittest

import numpy as np

from flightplan2litchi.data_import.field_parser import FieldKind, is_missing, parse_field
from flightplan2litchi.errors import FieldError, InvalidValue, OutOfRange, ParseError


class TestParseField(unittest.TestCase):
    """Test parse_field."""

    def test_valid_real(self):
        """Test a plain double value."""
        self.assertEqual(parse_field("42.5", FieldKind.REAL, 0, 100), 42.5)

    def test_range_is_inclusive(self):
        """Test both bounds are accepted."""
        self.assertEqual(parse_field("-180", FieldKind.REAL, -180, 180), -180.0)
        self.assertEqual(parse_field("180", FieldKind.REAL, -180, 180), 180.0)

    def test_out_of_range_real(self):
        """Test values outside the range are rejected."""
        with self.assertRaises(OutOfRange):
            parse_field("200", FieldKind.REAL, 0, 100)
        with self.assertRaises(OutOfRange):
            parse_field("-0.001", FieldKind.REAL, 0, 100)

    def test_bad_format(self):
        """Test malformed numbers raise ParseError."""
        with self.assertRaises(ParseError):
            parse_field("abc", FieldKind.REAL, 0, 100)
        with self.assertRaises(ParseError):
            parse_field("4.2.1", FieldKind.REAL32, 0, 100)
        with self.assertRaises(ParseError):
            parse_field("4.5", FieldKind.SMALL_INT, 0, 100)

    def test_digit_grouping_and_padding_rejected(self):
        """Test text float() would accept but a CSV number must not contain."""
        for text in ("1_0", " 12.5", "12.5 ", "\t7", "\u0661\u0662"):
            with self.subTest(text=text):
                with self.assertRaises(ParseError):
                    parse_field(text, FieldKind.REAL, 0, 100)
        with self.assertRaises(ParseError):
            parse_field("1_0", FieldKind.SMALL_INT, 0, 100)
        with self.assertRaises(ParseError):
            parse_field(" 5", FieldKind.REAL32, 0, 100)

    def test_missing_values(self):
        """Test NaN, null and empty cells raise InvalidValue."""
        for text in ("nan", "NaN", "NAN", "", "null", "NULL", "  "):
            with self.subTest(text=text):
                with self.assertRaises(InvalidValue):
                    parse_field(text, FieldKind.REAL, 0, 100)

    def test_signed_nan_is_invalid(self):
        """Test NaN spellings that float() accepts are still rejected."""
        with self.assertRaises(InvalidValue):
            parse_field("+nan", FieldKind.REAL, 0, 100)

    def test_infinity_out_of_range(self):
        """Test infinity never passes a finite range."""
        with self.assertRaises(OutOfRange):
            parse_field("inf", FieldKind.REAL, 0, 1e308)

    def test_real32_precision(self):
        """Test single precision rounding is applied to the result."""
        value = parse_field("1.333333333333", FieldKind.REAL32, 0, 100)
        self.assertEqual(value, float(np.float32(1.333333333333)))
        self.assertNotEqual(value, 1.333333333333)

    def test_real32_exact_value(self):
        """Test values exactly representable in single precision are unchanged."""
        self.assertEqual(parse_field("42.5", FieldKind.REAL32, 0, 100), 42.5)

    def test_valid_small_int(self):
        """Test integer parsing."""
        value = parse_field("42", FieldKind.SMALL_INT, 0, 100)
        self.assertEqual(value, 42)
        self.assertIsInstance(value, int)

    def test_small_int_overflow(self):
        """Test integers outside 8-bit range are rejected."""
        with self.assertRaises(OutOfRange):
            parse_field("200", FieldKind.SMALL_INT, 0, 1000)
        with self.assertRaises(OutOfRange):
            parse_field("-129", FieldKind.SMALL_INT, -1000, 0)

    def test_errors_are_value_errors(self):
        """Test field errors can be caught as ValueError and FieldError."""
        with self.assertRaises(ValueError):
            parse_field("abc", FieldKind.REAL, 0, 1)
        with self.assertRaises(FieldError):
            parse_field("", FieldKind.REAL, 0, 1)

    def test_idempotent_on_formatted_output(self):
        """Test parsing a formatted parsed value yields the same value."""
        cases = [
            ("43.0712345", FieldKind.REAL, -90, 90, "{:.7f}"),
            ("-89.4012345", FieldKind.REAL, -180, 180, "{:.7f}"),
            ("61.25", FieldKind.REAL, 0, 120, "{:.3f}"),
            ("0.1", FieldKind.REAL32, 0, 1, "{!r}"),
            ("-90", FieldKind.REAL32, -90, 0, "{!r}"),
            ("17", FieldKind.SMALL_INT, 0, 100, "{}"),
        ]
        for text, kind, low, high, fmt in cases:
            with self.subTest(text=text):
                first = parse_field(text, kind, low, high)
                second = parse_field(fmt.format(first), kind, low, high)
                self.assertEqual(first, second)


class TestIsMissing(unittest.TestCase):
    """Test the missing-value predicate."""

    def test_missing(self):
        """Test tokens treated as missing."""
        for text in ("nan", "NaN", "null", "Null", "", " "):
            self.assertTrue(is_missing(text), text)

    def test_present(self):
        """Test numeric text is not missing."""
        for text in ("0", "12.5", "-1", "nana"):
            self.assertFalse(is_missing(text), text)


if __name__ == '__main__':
    unittest.main()
