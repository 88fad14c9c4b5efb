from __future__ import annotations

import unittest

from chartgeom.adapters.normalize import normalize_series
from chartgeom.bars import category_label_lines, layout_bars
from chartgeom.series import ChartDataPoint, ChartSeries


def _categories(id: str, values: dict[str, float]) -> ChartSeries:
    return ChartSeries(id=id, points=[ChartDataPoint(x=k, y=v) for k, v in values.items()])


class LayoutBarsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.data = normalize_series(
            [
                _categories("a", {"q1": 1.0, "q2": 2.0, "q3": 3.0}),
                _categories("b", {"q1": 3.0, "q2": 2.0, "q3": 1.0}),
            ]
        )

    def test_two_series_by_three_categories_gives_six_equal_width_bars(self) -> None:
        bars = layout_bars(self.data, plot_width=300.0, plot_height=200.0, group_spacing=20.0, bar_spacing=2.0)
        self.assertEqual(len(bars), 6)
        widths = {round(b.width, 9) for b in bars}
        self.assertEqual(len(widths), 1)
        self.assertAlmostEqual(bars[0].width, ((300.0 - 40.0) / 3.0 - 2.0) / 2.0)

    def test_bars_within_a_group_do_not_overlap(self) -> None:
        bars = layout_bars(self.data, plot_width=300.0, plot_height=200.0)
        for group in range(3):
            left, right = bars[group * 2], bars[group * 2 + 1]
            self.assertEqual(left.label, right.label)
            self.assertEqual((left.series_id, right.series_id), ("a", "b"))
            self.assertLessEqual(left.x + left.width, right.x)

    def test_groups_run_left_to_right_in_domain_order(self) -> None:
        bars = layout_bars(self.data, plot_width=300.0, plot_height=200.0)
        self.assertEqual([b.label for b in bars[::2]], ["q1", "q2", "q3"])
        xs = [b.x for b in bars[::2]]
        self.assertEqual(xs, sorted(xs))
        self.assertEqual(bars[0].x, 0.0)

    def test_bars_are_bottom_anchored(self) -> None:
        bars = layout_bars(self.data, plot_width=300.0, plot_height=200.0)
        for bar in bars:
            self.assertAlmostEqual(bar.y + bar.height, 200.0)
        tallest = max(bars, key=lambda b: b.height)
        self.assertEqual(tallest.value, 3.0)
        # padded bounds are 0.8..3.2
        self.assertAlmostEqual(tallest.height, (3.0 - 0.8) / 2.4 * 200.0)

    def test_bar_carries_original_point_and_color(self) -> None:
        bars = layout_bars(self.data, plot_width=300.0, plot_height=200.0)
        self.assertEqual(bars[1].data_point, ChartDataPoint(x="q1", y=3.0))
        self.assertEqual(bars[0].color, self.data.series[0].color)

    def test_empty_inputs_give_no_bars(self) -> None:
        self.assertEqual(layout_bars(normalize_series([]), plot_width=300.0, plot_height=200.0), ())
        empty_points = normalize_series([ChartSeries(id="a")])
        self.assertEqual(layout_bars(empty_points, plot_width=300.0, plot_height=200.0), ())
        self.assertEqual(layout_bars(self.data, plot_width=0.0, plot_height=200.0), ())
        self.assertEqual(layout_bars(self.data, plot_width=300.0, plot_height=-5.0), ())

    def test_negative_values_are_not_rebased_from_zero(self) -> None:
        data = normalize_series([_categories("a", {"x": -5.0, "y": 5.0})])
        bars = layout_bars(data, plot_width=100.0, plot_height=120.0, group_spacing=0.0)
        negative = bars[0]
        self.assertEqual(negative.value, -5.0)
        # bounds are -6..6, so -5 still gets a positive height measured from the bottom
        self.assertAlmostEqual(negative.height, 10.0)
        self.assertAlmostEqual(negative.y, 110.0)

    def test_flat_values_render_at_half_height(self) -> None:
        data = normalize_series([_categories("a", {"x": 5.0, "y": 5.0})])
        bars = layout_bars(data, plot_width=100.0, plot_height=80.0)
        self.assertEqual([b.height for b in bars], [40.0, 40.0])

    def test_category_labels_are_centred_under_groups(self) -> None:
        lines = category_label_lines(self.data, plot_width=300.0, group_spacing=20.0)
        group_width = (300.0 - 40.0) / 3.0
        self.assertEqual([line.label for line in lines], ["q1", "q2", "q3"])
        self.assertAlmostEqual(lines[0].position, group_width / 2.0)
        self.assertAlmostEqual(lines[2].position, 2 * (group_width + 20.0) + group_width / 2.0)

    def test_label_formatter_applies_to_bars_and_category_labels(self) -> None:
        upper = str.upper
        bars = layout_bars(self.data, plot_width=300.0, plot_height=200.0, label_formatter=upper)
        lines = category_label_lines(self.data, plot_width=300.0, label_formatter=upper)
        self.assertEqual([b.label for b in bars[::2]], ["Q1", "Q2", "Q3"])
        self.assertEqual([line.label for line in lines], ["Q1", "Q2", "Q3"])

    def test_bars_carry_aria_label(self) -> None:
        bars = layout_bars(self.data, plot_width=300.0, plot_height=200.0, value_formatter=lambda v: f"{v:.1f}")
        self.assertEqual(bars[0].aria_label, "q1: 1.0")
        self.assertEqual(bars[1].aria_label, "q1: 3.0")


if __name__ == "__main__":
    unittest.main()
