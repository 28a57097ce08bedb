from __future__ import annotations

import unittest

import numpy as np
import plotly.graph_objects as go

from luvatrix_graphs import (
    AxisLayout,
    BandConfiguration,
    BandsConfiguration,
    BarsGraphConfiguration,
    BarsGraphData,
    CdfGraphData,
    ColorAxisLayout,
    DistributionConfiguration,
    DistributionGraphConfiguration,
    DistributionGraphData,
    Figure,
    Layout,
    LineConfiguration,
    LineGraphConfiguration,
    LineGraphData,
    PointsConfiguration,
    PointsGraphConfiguration,
    PointsGraphData,
    ScaleConfiguration,
    Trace,
    render,
)


class TraceSerializationTests(unittest.TestCase):
    def test_nan_breaks_become_none(self) -> None:
        trace = Trace(kind="line", x=np.asarray([0.0, np.nan, 1.0]), y=(1.0, float("nan"), 2.0), color="red", width=2.0)
        out = trace.to_dict()
        self.assertEqual(out["x"], [0.0, None, 1.0])
        self.assertEqual(out["y"], [1.0, None, 2.0])
        self.assertEqual(out["line"], {"color": "red", "width": 2.0})
        self.assertEqual(out["mode"], "lines")
        self.assertNotIn("offsetgroup", out)

    def test_markers_on_a_color_axis(self) -> None:
        trace = Trace(
            kind="markers",
            x=[1.0],
            y=[2.0],
            colors=np.asarray([0.5]),
            sizes=np.asarray([6.0]),
            coloraxis="coloraxis",
            hovers=("hi",),
        )
        out = trace.to_dict()
        self.assertEqual(out["marker"], {"color": [0.5], "size": [6.0], "coloraxis": "coloraxis"})
        self.assertEqual(out["text"], ["hi"])
        self.assertFalse(out["showlegend"])

    def test_dashed_line_and_legend_group(self) -> None:
        out = Trace(kind="line", x=[0, 1], y=[0, 1], is_dashed=True, legend_group="g", legend_group_title="T").to_dict()
        self.assertEqual(out["line"]["dash"], "dash")
        self.assertEqual(out["legendgroup"], "g")
        self.assertEqual(out["legendgrouptitle"], {"text": "T"})

    def test_size_counts_elements(self) -> None:
        self.assertEqual(Trace(kind="bar", x=[1, 2, 3]).size, 3)
        self.assertEqual(Trace(kind="box").size, 0)


class LayoutSerializationTests(unittest.TestCase):
    def test_log_range_is_in_decades(self) -> None:
        out = AxisLayout(is_log=True, range=(1.0, 1000.0)).to_dict()
        self.assertEqual(out["type"], "log")
        self.assertEqual(out["range"], [0.0, 3.0])
        self.assertNotIn("visible", out)

    def test_reversed_axis(self) -> None:
        self.assertEqual(AxisLayout(range=(0.0, 2.0), is_reversed=True).to_dict()["range"], [2.0, 0.0])
        self.assertEqual(AxisLayout(is_reversed=True).to_dict()["autorange"], "reversed")

    def test_color_axes_are_keyed_by_name(self) -> None:
        layout = Layout(
            color_axes=(
                ColorAxisLayout(name="coloraxis", stops=((0.0, "red"), (1.0, "blue")), cmin=0.0, cmax=1.0),
                ColorAxisLayout(name="coloraxis2", stops=((0.0, "red"), (1.0, "blue")), cmin=2.0, cmax=3.0, title="T"),
            )
        )
        out = layout.to_dict()
        self.assertEqual(out["coloraxis"]["colorscale"], [[0.0, "red"], [1.0, "blue"]])
        self.assertEqual(out["coloraxis2"]["colorbar"], {"title": {"text": "T"}})
        self.assertEqual(layout.color_axis("coloraxis2").cmin, 2.0)
        self.assertIsNone(layout.color_axis("coloraxis3"))

    def test_figure_to_dict(self) -> None:
        figure = Figure(traces=(Trace(kind="bar", x=[1], y=[2]),), layout=Layout(title="t", bar_mode="stack"))
        out = figure.to_dict()
        self.assertEqual(out["data"][0]["type"], "bar")
        self.assertEqual(out["layout"]["barmode"], "stack")
        self.assertEqual(out["layout"]["title"], {"text": "t"})
        self.assertEqual(figure.traces_of("bar"), figure.traces)
        self.assertEqual(figure.traces_of("box"), ())


class PlotlyFigureTests(unittest.TestCase):
    def test_every_trace_kind_is_accepted_by_plotly(self) -> None:
        figures = (
            render(
                PointsGraphData(xs=[1, 2], ys=[1, 2], colors=[0.0, 1.0], hovers=["a", "b"]),
                PointsGraphConfiguration(
                    points=PointsConfiguration(color_scale=ScaleConfiguration(show_scale=True)),
                    diagonal_bands=BandsConfiguration(
                        low=BandConfiguration(offset=-0.5, is_filled=True), middle=BandConfiguration(offset=0.0)
                    ),
                ),
            ),
            render(
                LineGraphData(xs=[0, 1], ys=[1, 2]),
                LineGraphConfiguration(line=LineConfiguration(is_filled=True, is_dashed=True)),
            ),
            render(
                BarsGraphData(values=[[1, 2], [3, 4]], colors=["red", "blue"], names=["a", "b"]),
                BarsGraphConfiguration(show_legend=True),
            ),
            render(DistributionGraphData(values=[1, 2, 3])),
            render(
                DistributionGraphData(values=[1, 2, 3]),
                DistributionGraphConfiguration(
                    distribution=DistributionConfiguration(show_violin=True, show_outliers=True)
                ),
            ),
            render(CdfGraphData(values=[3, 1, 2])),
        )
        for figure in figures:
            plotly_figure = figure.to_plotly()
            self.assertIsInstance(plotly_figure, go.Figure)
            self.assertEqual(len(plotly_figure.data), len(figure.traces))
        points = figures[0].to_plotly()
        self.assertEqual(points.layout.coloraxis.cmin, 0.0)
        self.assertEqual(points.layout.coloraxis.cmax, 1.0)
        self.assertEqual({trace.type for trace in figures[2].to_plotly().data}, {"bar"})
        self.assertEqual(figures[4].to_plotly().data[0].type, "violin")

    def test_trace_types_follow_the_kind(self) -> None:
        figure = Figure(
            traces=(
                Trace(kind="fill", x=[0, 1, 1], y=[0, 0, 1], color="grey"),
                Trace(kind="markers", x=[1.0], y=[2.0], color="red", sizes=[6.0]),
                Trace(kind="box", y=[1.0, 2.0], color="red"),
            ),
            layout=Layout(title="t", template="simple_white"),
        )
        plotly_figure = figure.to_plotly()
        self.assertEqual([trace.type for trace in plotly_figure.data], ["scatter", "scatter", "box"])
        self.assertEqual(plotly_figure.data[0].fill, "toself")
        self.assertEqual(plotly_figure.layout.title.text, "t")


if __name__ == "__main__":
    unittest.main()
