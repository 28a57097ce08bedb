from __future__ import annotations

import unittest

from luvatrix_graphs import (
    AxisConfiguration,
    CdfDirection,
    CdfGraphConfiguration,
    CdfGraphData,
    CdfsGraphConfiguration,
    CdfsGraphData,
    Graph,
    LineConfiguration,
    LineGraphConfiguration,
    LineGraphData,
    LinesGraphConfiguration,
    LinesGraphData,
    Stacking,
    ValuesOrientation,
    render,
    validate_object,
)


class LineRenderTests(unittest.TestCase):
    def test_single_line(self) -> None:
        figure = render(LineGraphData(xs=[0, 1, 2], ys=[3, 1, 2]))
        (trace,) = figure.traces
        self.assertEqual(trace.kind, "line")
        self.assertEqual(trace.y.tolist(), [3.0, 1.0, 2.0])
        self.assertIsNone(trace.fill)
        self.assertEqual(trace.width, 1.5)

    def test_filled_line(self) -> None:
        figure = render(
            LineGraphData(xs=[0, 1], ys=[1, 2]),
            LineGraphConfiguration(line=LineConfiguration(width=None, is_filled=True, color="red")),
        )
        self.assertEqual(figure.traces[0].fill, "tozeroy")
        self.assertEqual(figure.traces[0].to_dict()["fillcolor"], "red")

    def test_log_axis_plots_shifted_values(self) -> None:
        figure = render(
            LineGraphData(xs=[0, 9], ys=[1, 2]),
            LineGraphConfiguration(x_axis=AxisConfiguration(minimum=0, maximum=99, log_regularization=1)),
        )
        self.assertEqual(figure.traces[0].x.tolist(), [1.0, 10.0])
        x_axis = figure.layout.x_axis
        self.assertTrue(x_axis.is_log)
        self.assertEqual(x_axis.range, (1.0, 100.0))
        self.assertEqual(x_axis.to_dict()["range"], [0.0, 2.0])


class LinesRenderTests(unittest.TestCase):
    def test_hidden_lines_are_skipped(self) -> None:
        figure = render(
            LinesGraphData(xs=[[0, 1], [0, 1]], ys=[[1, 2], [3, 4]], names=["a", "b"], colors=["red", ""])
        )
        (trace,) = figure.traces
        self.assertEqual((trace.name, trace.color), ("a", "red"))

    def test_stacked_lines_are_unified_and_accumulated(self) -> None:
        figure = render(
            LinesGraphData(xs=[[0, 1, 2], [0.5, 1.5]], ys=[[1, 1, 1], [2, 2]]),
            LinesGraphConfiguration(stacking=Stacking.VALUES, line=LineConfiguration(is_filled=True)),
        )
        first, second = figure.traces
        self.assertEqual(first.x.tolist(), [0.0, 0.5, 1.0, 1.5, 2.0])
        self.assertEqual(first.y.tolist(), [1.0, 1.0, 1.0, 1.0, 1.0])
        self.assertEqual(second.y.tolist(), [1.0, 3.0, 3.0, 3.0, 1.0])
        self.assertEqual((first.fill, second.fill), ("tozeroy", "tonexty"))

    def test_percent_stacking_tops_out_at_one_hundred(self) -> None:
        figure = render(
            LinesGraphData(xs=[[0, 1], [0, 1]], ys=[[1, 3], [3, 1]]),
            LinesGraphConfiguration(stacking=Stacking.PERCENTS),
        )
        self.assertEqual(figure.traces[0].y.tolist(), [25.0, 75.0])
        self.assertEqual(figure.traces[1].y.tolist(), [100.0, 100.0])

    def test_unsorted_xs_cannot_be_stacked(self) -> None:
        graph = Graph(
            data=LinesGraphData(xs=[[1, 0]], ys=[[1, 2]]),
            configuration=LinesGraphConfiguration(stacking=Stacking.VALUES),
        )
        self.assertIn("unsorted data.xs[0]", validate_object(graph))

    def test_per_line_styles_override_the_configuration(self) -> None:
        figure = render(
            LinesGraphData(
                xs=[[0, 1], [0, 1]], ys=[[1, 2], [3, 4]], widths=[3, 4], are_dashed=[True, False]
            ),
            LinesGraphConfiguration(show_legend=True),
        )
        self.assertEqual([trace.width for trace in figure.traces], [3.0, 4.0])
        self.assertEqual([trace.is_dashed for trace in figure.traces], [True, False])
        self.assertTrue(figure.layout.show_legend)


class CdfRenderTests(unittest.TestCase):
    def test_cdf_fractions_on_the_y_axis(self) -> None:
        figure = render(CdfGraphData(values=[3, 1, 2, 4]))
        (trace,) = figure.traces
        self.assertEqual(trace.x.tolist(), [1.0, 2.0, 3.0, 4.0])
        self.assertEqual(trace.y.tolist(), [0.25, 0.5, 0.75, 1.0])
        self.assertEqual(figure.layout.y_axis.range, (0.0, 1.0))

    def test_vertical_percent_cdf(self) -> None:
        figure = render(
            CdfGraphData(values=[2, 1]),
            CdfGraphConfiguration(
                orientation=ValuesOrientation.VERTICAL,
                show_percent=True,
                direction=CdfDirection.DOWN_TO_VALUE,
            ),
        )
        (trace,) = figure.traces
        self.assertEqual(trace.y.tolist(), [1.0, 2.0])
        self.assertEqual(trace.x.tolist(), [100.0, 50.0])
        self.assertEqual(figure.layout.x_axis.range, (0.0, 100.0))

    def test_several_cdfs(self) -> None:
        figure = render(
            CdfsGraphData(values=[[1, 2], [3], [4, 5]], names=["a", "b", "c"], colors=["red", "", "blue"]),
            CdfsGraphConfiguration(show_legend=True),
        )
        self.assertEqual([trace.name for trace in figure.traces], ["a", "c"])
        self.assertEqual([trace.color for trace in figure.traces], ["red", "blue"])


if __name__ == "__main__":
    unittest.main()
