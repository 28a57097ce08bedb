from __future__ import annotations

import unittest

from luvatrix_graphs import (
    BarGraphConfiguration,
    BarGraphData,
    BarsGraphConfiguration,
    BarsGraphData,
    DistributionConfiguration,
    DistributionGraphConfiguration,
    DistributionGraphData,
    DistributionsGraphConfiguration,
    DistributionsGraphData,
    Stacking,
    ValuesOrientation,
    render,
)


class BarRenderTests(unittest.TestCase):
    def test_bars_with_empty_color_are_left_out(self) -> None:
        figure = render(BarGraphData(values=[1, 2, 3], names=["a", "b", "c"], colors=["red", "", "blue"]))
        (trace,) = figure.traces
        self.assertEqual(trace.x.tolist(), ["a", "c"])
        self.assertEqual(trace.y.tolist(), [1.0, 3.0])
        self.assertEqual(trace.colors, ("red", "blue"))
        self.assertEqual(trace.orientation, "v")

    def test_horizontal_bars_and_gap(self) -> None:
        figure = render(
            BarGraphData(values=[1, 2]),
            BarGraphConfiguration(orientation=ValuesOrientation.HORIZONTAL, bar_gap=0.25),
        )
        (trace,) = figure.traces
        self.assertEqual(trace.orientation, "h")
        self.assertEqual(trace.x.tolist(), [1.0, 2.0])
        self.assertEqual(trace.y.tolist(), [0.0, 1.0])
        self.assertEqual(figure.layout.to_dict()["bargap"], 0.25)


class BarsRenderTests(unittest.TestCase):
    def test_series_are_grouped_by_default(self) -> None:
        figure = render(BarsGraphData(values=[[1, 2], [3, 4]], names=["x", "y"], bar_names=["a", "b"]))
        self.assertEqual([trace.name for trace in figure.traces], ["x", "y"])
        self.assertEqual(figure.layout.bar_mode, "group")

    def test_percent_stacking(self) -> None:
        figure = render(
            BarsGraphData(values=[[1, 0], [3, 0]], colors=["red", "blue"]),
            BarsGraphConfiguration(stacking=Stacking.PERCENTS, show_legend=True),
        )
        first, second = figure.traces
        self.assertEqual(first.y.tolist(), [25.0, 0.0])
        self.assertEqual(second.y.tolist(), [75.0, 0.0])
        self.assertEqual(figure.layout.bar_mode, "stack")
        self.assertTrue(all(trace.show_legend for trace in figure.traces))

    def test_hidden_series(self) -> None:
        figure = render(BarsGraphData(values=[[1], [2]], colors=["", "green"], hovers=["one", "two"]))
        (trace,) = figure.traces
        self.assertEqual(trace.color, "green")
        self.assertEqual(trace.hovers, ("two",))

    def test_hidden_series_take_no_share_of_a_percent_stack(self) -> None:
        figure = render(
            BarsGraphData(values=[[1], [3]], colors=["", "green"]),
            BarsGraphConfiguration(stacking=Stacking.PERCENTS),
        )
        (trace,) = figure.traces
        self.assertEqual(trace.y.tolist(), [100.0])

    def test_all_series_hidden(self) -> None:
        figure = render(
            BarsGraphData(values=[[1], [3]], colors=["", ""]),
            BarsGraphConfiguration(stacking=Stacking.VALUES),
        )
        self.assertEqual(figure.traces, ())


class DistributionRenderTests(unittest.TestCase):
    def test_default_is_a_single_box(self) -> None:
        figure = render(DistributionGraphData(values=[1, 2, 3, 4, 100]))
        (trace,) = figure.traces
        self.assertEqual(trace.kind, "box")
        self.assertEqual(trace.y.tolist(), [1.0, 2.0, 3.0, 4.0, 100.0])
        self.assertFalse(trace.to_dict()["boxpoints"])

    def test_violin_with_box_and_outliers(self) -> None:
        figure = render(
            DistributionGraphData(values=[1, 2, 3]),
            DistributionGraphConfiguration(
                distribution=DistributionConfiguration(show_violin=True, show_outliers=True),
                orientation=ValuesOrientation.HORIZONTAL,
            ),
        )
        (trace,) = figure.traces
        self.assertEqual((trace.kind, trace.side, trace.show_box), ("violin", "both", True))
        self.assertEqual(trace.orientation, "h")
        self.assertEqual(trace.to_dict()["points"], "outliers")

    def test_curve_is_half_a_violin(self) -> None:
        figure = render(
            DistributionGraphData(values=[1, 2, 3]),
            DistributionGraphConfiguration(distribution=DistributionConfiguration(show_box=False, show_curve=True)),
        )
        (trace,) = figure.traces
        self.assertEqual((trace.kind, trace.side, trace.show_box), ("violin", "positive", False))

    def test_overlaid_distributions(self) -> None:
        figure = render(
            DistributionsGraphData(values=[[1, 2], [3, 4], [5]], names=["a", "b", "c"], colors=["red", "", "blue"]),
            DistributionsGraphConfiguration(overlay=True),
        )
        self.assertEqual([trace.name for trace in figure.traces], ["a", "c"])
        self.assertEqual((figure.layout.box_mode, figure.layout.violin_mode), ("overlay", "overlay"))


if __name__ == "__main__":
    unittest.main()
