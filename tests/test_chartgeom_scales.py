from __future__ import annotations

import math
import unittest

import numpy as np

from chartgeom.scales import (
    format_coordinate,
    format_key_number,
    format_timestamp_ms,
    format_value,
    pad_range,
    scale_array,
    scale_linear,
    scale_y,
)


class ScaleLinearTests(unittest.TestCase):
    def test_domain_endpoints_map_exactly_to_range_endpoints(self) -> None:
        self.assertEqual(scale_linear(0.0, 0.0, 10.0, 0.0, 100.0), 0.0)
        self.assertEqual(scale_linear(10.0, 0.0, 10.0, 0.0, 100.0), 100.0)
        self.assertEqual(scale_linear(0.1, 0.1, 0.3, 0.1, 0.7), 0.1)
        self.assertEqual(scale_linear(0.3, 0.1, 0.3, 0.1, 0.7), 0.7)

    def test_y_is_inverted_for_chart_space(self) -> None:
        self.assertEqual(scale_y(-5.0, -5.0, 15.0, 300.0), 300.0)
        self.assertEqual(scale_y(15.0, -5.0, 15.0, 300.0), 0.0)
        self.assertEqual(scale_y(5.0, -5.0, 15.0, 300.0), 150.0)

    def test_degenerate_domain_maps_to_range_midpoint(self) -> None:
        for value in (-100.0, 5.0, 1e9):
            out = scale_linear(value, 5.0, 5.0, 0.0, 100.0)
            self.assertEqual(out, 50.0)
            self.assertFalse(math.isnan(out))
        self.assertEqual(scale_y(3.0, 3.0, 3.0, 200.0), 100.0)

    def test_mapping_preserves_order(self) -> None:
        values = [-3.0, -1.0, 0.0, 0.5, 2.0, 9.0]
        mapped = [scale_linear(v, -3.0, 9.0, 0.0, 640.0) for v in values]
        self.assertEqual(mapped, sorted(mapped))
        inverted = [scale_y(v, -3.0, 9.0, 480.0) for v in values]
        self.assertEqual(inverted, sorted(inverted, reverse=True))

    def test_array_form_matches_scalar_form(self) -> None:
        values = np.asarray([0.0, 2.5, 5.0, 10.0], dtype=np.float64)
        out = scale_array(values, 0.0, 10.0, 320.0, 0.0)
        expected = [scale_linear(float(v), 0.0, 10.0, 320.0, 0.0) for v in values]
        self.assertTrue(np.allclose(out, expected))
        flat = scale_array(values, 1.0, 1.0, 0.0, 10.0)
        self.assertTrue(np.array_equal(flat, np.full(4, 5.0)))

    def test_pad_range_only_pads_positive_spans(self) -> None:
        self.assertEqual(pad_range(0.0, 10.0), (-1.0, 11.0))
        self.assertEqual(pad_range(4.0, 4.0), (4.0, 4.0))


class FormattingTests(unittest.TestCase):
    def test_format_value_groups_thousands_and_limits_fraction_digits(self) -> None:
        self.assertEqual(format_value(1234.567), "1,234.57")
        self.assertEqual(format_value(1200.0), "1,200")
        self.assertEqual(format_value(2.5, 0), "3")
        self.assertEqual(format_value(0.125, 1), "0.1")

    def test_format_value_trims_trailing_zeros_and_negative_zero(self) -> None:
        self.assertEqual(format_value(10.0), "10")
        self.assertEqual(format_value(1.50), "1.5")
        self.assertEqual(format_value(-0.001), "0")

    def test_format_key_number_drops_integral_fraction(self) -> None:
        self.assertEqual(format_key_number(3.0), "3")
        self.assertEqual(format_key_number(-2.0), "-2")
        self.assertEqual(format_key_number(2.5), "2.5")

    def test_format_timestamp_ms_prefers_plain_dates(self) -> None:
        self.assertEqual(format_timestamp_ms(1704067200000.0), "2024-01-01")
        self.assertEqual(format_timestamp_ms(1704067200000.0 + 90 * 60 * 1000), "2024-01-01T01:30:00")

    def test_format_coordinate(self) -> None:
        self.assertEqual(format_coordinate(12.0), "12")
        self.assertEqual(format_coordinate(1.23456), "1.235")
        self.assertEqual(format_coordinate(-0.0001), "0")


if __name__ == "__main__":
    unittest.main()
