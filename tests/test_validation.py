from __future__ import annotations

import unittest

from luvatrix_graphs import (
    AxisConfiguration,
    BandConfiguration,
    BandsConfiguration,
    BarGraphConfiguration,
    BarsGraphConfiguration,
    BarsGraphData,
    DistributionConfiguration,
    Graph,
    InvalidObjectError,
    LineConfiguration,
    LineGraphConfiguration,
    LinesGraphConfiguration,
    LinesGraphData,
    PointsConfiguration,
    PointsGraphConfiguration,
    PointsGraphData,
    ScaleConfiguration,
    SizeRangeConfiguration,
    Stacking,
    assert_valid_object,
    render,
    validate_object,
)


class ConfigurationValidationTests(unittest.TestCase):
    def test_axis_bounds_must_be_ordered(self) -> None:
        message = validate_object(AxisConfiguration(minimum=5, maximum=3))
        self.assertIsNotNone(message)
        self.assertIn("5", message)
        self.assertIn("3", message)
        self.assertIn("larger", message)

    def test_nested_path_names_the_offending_field(self) -> None:
        configuration = BarGraphConfiguration(value_axis=AxisConfiguration(minimum=1, maximum=0))
        self.assertEqual(
            validate_object(configuration),
            "configuration.value_axis.maximum: 0 is not larger than configuration.value_axis.minimum: 1",
        )

    def test_log_axis_requires_positive_shifted_bounds(self) -> None:
        self.assertIsNone(validate_object(AxisConfiguration(minimum=0, log_regularization=1)))
        message = validate_object(AxisConfiguration(minimum=0, log_regularization=0))
        self.assertIn("non-positive log configuration.minimum", message)
        self.assertIn("negative", validate_object(AxisConfiguration(log_regularization=-1)))

    def test_band_offsets_must_be_ordered(self) -> None:
        bands = BandsConfiguration(low=BandConfiguration(offset=5), middle=BandConfiguration(offset=3))
        message = validate_object(bands)
        self.assertIn("low.offset", message)
        self.assertIn("is not less than", message)
        self.assertIn("middle.offset", message)

    def test_band_offsets_low_and_high_without_middle(self) -> None:
        bands = BandsConfiguration(low=BandConfiguration(offset=2), high=BandConfiguration(offset=1))
        self.assertIn("is not less than configuration.high.offset", validate_object(bands))
        ok = BandsConfiguration(
            low=BandConfiguration(offset=1), middle=BandConfiguration(offset=2), high=BandConfiguration(offset=3)
        )
        self.assertIsNone(validate_object(ok))

    def test_diagonal_bands_need_axes_of_the_same_kind(self) -> None:
        configuration = PointsGraphConfiguration(
            x_axis=AxisConfiguration(log_regularization=0),
            diagonal_bands=BandsConfiguration(middle=BandConfiguration(offset=1)),
        )
        self.assertIn("combination of linear and log scale axes", validate_object(configuration))

    def test_diagonal_bands_on_two_log_axes_need_positive_offsets(self) -> None:
        configuration = PointsGraphConfiguration(
            x_axis=AxisConfiguration(log_regularization=0),
            y_axis=AxisConfiguration(log_regularization=0),
            diagonal_bands=BandsConfiguration(low=BandConfiguration(offset=-1)),
        )
        self.assertEqual(
            validate_object(configuration),
            "non-positive log configuration.diagonal_bands.low.offset: -1",
        )

    def test_distribution_shape_rules(self) -> None:
        self.assertIn(
            "must specify at least one of",
            validate_object(DistributionConfiguration(show_box=False)),
        )
        self.assertIn(
            "can't specify both of",
            validate_object(DistributionConfiguration(show_violin=True, show_curve=True)),
        )
        self.assertIsNone(validate_object(DistributionConfiguration(show_violin=True)))

    def test_line_needs_width_or_fill(self) -> None:
        self.assertIn("must be specified", validate_object(LineConfiguration(width=None)))
        self.assertIsNone(validate_object(LineConfiguration(width=None, is_filled=True)))
        self.assertIn("non-positive", validate_object(LineConfiguration(width=0)))

    def test_palette_rules(self) -> None:
        self.assertIn("unknown", validate_object(PointsConfiguration(color_palette="NoSuchPalette")))
        self.assertIsNone(validate_object(PointsConfiguration(color_palette="viridis")))
        self.assertIn("single", validate_object(PointsConfiguration(color_palette=((1.0, "red"), (1.0, "blue")))))
        self.assertIn("duplicate", validate_object(PointsConfiguration(color_palette=(("A", "red"), ("A", "blue")))))
        self.assertIn("invalid", validate_object(PointsConfiguration(color_palette=((0.0, "nope"), (1.0, "red")))))
        self.assertIsNone(validate_object(PointsConfiguration(color_palette=(("A", "red"), ("B", "")))))

    def test_reversed_categorical_palette_is_rejected(self) -> None:
        configuration = PointsConfiguration(
            color_palette=(("A", "red"), ("B", "blue")),
            color_scale=ScaleConfiguration(reverse_scale=True),
        )
        self.assertEqual(validate_object(configuration), "reversed categorical configuration.color_palette")

    def test_single_color_scale_bound_must_leave_room_for_the_palette(self) -> None:
        palette = ((0.0, "red"), (1.0, "blue"))
        self.assertEqual(
            validate_object(PointsConfiguration(color_palette=palette, color_scale=ScaleConfiguration(minimum=5))),
            "configuration.color_scale.minimum: 5 is not less than the largest configuration.color_palette value: 1.0",
        )
        self.assertEqual(
            validate_object(PointsConfiguration(color_palette=palette, color_scale=ScaleConfiguration(maximum=0))),
            "configuration.color_scale.maximum: 0 is not larger than the smallest configuration.color_palette value: 0.0",
        )
        self.assertIsNone(
            validate_object(PointsConfiguration(color_palette=palette, color_scale=ScaleConfiguration(minimum=0.5)))
        )

    def test_size_range_must_be_ordered(self) -> None:
        self.assertIn("is not larger than", validate_object(SizeRangeConfiguration(smallest=5, largest=2)))
        self.assertIn("negative", validate_object(SizeRangeConfiguration(smallest=-1)))

    def test_bar_gap_range(self) -> None:
        self.assertIn("negative", validate_object(BarGraphConfiguration(bar_gap=-0.1)))
        self.assertIn("too-large", validate_object(BarGraphConfiguration(bar_gap=1.0)))
        self.assertIsNone(validate_object(BarGraphConfiguration(bar_gap=0.2)))

    def test_stacking_with_log_axis_is_rejected(self) -> None:
        configuration = BarsGraphConfiguration(
            value_axis=AxisConfiguration(log_regularization=0), stacking=Stacking.VALUES
        )
        self.assertIn("specified for a log", validate_object(configuration))
        lines = LinesGraphConfiguration(y_axis=AxisConfiguration(log_regularization=0), stacking=Stacking.PERCENTS)
        self.assertIn("specified for a log", validate_object(lines))

    def test_assert_valid_object_raises(self) -> None:
        with self.assertRaises(InvalidObjectError) as ctx:
            assert_valid_object(AxisConfiguration(minimum=2, maximum=1))
        self.assertIn("larger", str(ctx.exception))
        assert_valid_object(AxisConfiguration(minimum=1, maximum=2))


class DataValidationTests(unittest.TestCase):
    def test_lengths_must_agree(self) -> None:
        data = PointsGraphData(xs=[1, 2, 3], ys=[1, 2])
        self.assertEqual(
            validate_object(data),
            "the number of data.ys: 2 is different from the number of data.xs: 3",
        )
        self.assertIn("data.sizes", validate_object(PointsGraphData(xs=[1, 2], ys=[1, 2], sizes=[1])))

    def test_sizes_must_not_be_negative(self) -> None:
        self.assertEqual(
            validate_object(PointsGraphData(xs=[1, 2], ys=[1, 2], sizes=[1, -1])),
            "negative data.sizes[1]: -1.0",
        )
        self.assertIsNone(validate_object(PointsGraphData(xs=[1, 2], ys=[1, 2], sizes=[0, 1])))

    def test_mixed_colors_are_rejected(self) -> None:
        data = PointsGraphData(xs=[1, 2], ys=[1, 2], colors=["red", 1.0])
        self.assertEqual(validate_object(data), "mixed numeric and string data.colors")

    def test_edges_must_join_distinct_existing_points(self) -> None:
        self.assertIn("to invalid point: 3", validate_object(PointsGraphData(xs=[1, 2], ys=[1, 2], edges=[(0, 3)])))
        self.assertIn(
            "from point to itself",
            validate_object(PointsGraphData(xs=[1, 2], ys=[1, 2], edges=[(1, 1)])),
        )
        self.assertIsNone(validate_object(PointsGraphData(xs=[1, 2], ys=[1, 2], edges=[(0, 1)])))

    def test_line_colors_must_be_valid_or_empty(self) -> None:
        data = LinesGraphData(xs=[[0, 1], [0, 1]], ys=[[1, 2], [2, 3]], colors=["red", "nope"])
        self.assertEqual(validate_object(data), "invalid data.colors[1]: nope")
        hidden = LinesGraphData(xs=[[0, 1], [0, 1]], ys=[[1, 2], [2, 3]], colors=["red", ""])
        self.assertIsNone(validate_object(hidden))

    def test_bars_series_must_have_the_same_length(self) -> None:
        data = BarsGraphData(values=[[1, 2, 3], [1, 2]])
        self.assertEqual(
            validate_object(data),
            "the number of data.values[1]: 2 is different from the number of data.values[0]: 3",
        )


class GraphValidationTests(unittest.TestCase):
    def test_log_axis_rejects_non_positive_data(self) -> None:
        graph = Graph(
            data=PointsGraphData(xs=[-1, 2], ys=[1, 2]),
            configuration=PointsGraphConfiguration(x_axis=AxisConfiguration(log_regularization=0)),
        )
        self.assertEqual(
            validate_object(graph),
            "non-positive log data.xs[0]: -1.0 + configuration.x_axis.log_regularization: 0",
        )

    def test_categorical_colors_must_be_palette_keys(self) -> None:
        graph = Graph(
            data=PointsGraphData(xs=[1, 2], ys=[1, 2], colors=["A", "C"]),
            configuration=PointsGraphConfiguration(
                points=PointsConfiguration(color_palette=(("A", "red"), ("B", "blue")))
            ),
        )
        self.assertEqual(
            validate_object(graph),
            "data.colors[1]: C is not a category of configuration.points.color_palette",
        )

    def test_explicit_colors_must_be_valid(self) -> None:
        graph = Graph(
            data=PointsGraphData(xs=[1, 2], ys=[1, 2], colors=["red", "nope"]),
            configuration=PointsGraphConfiguration(),
        )
        self.assertEqual(validate_object(graph), "invalid data.colors[1]: nope")

    def test_show_scale_rules(self) -> None:
        shown = PointsGraphConfiguration(points=PointsConfiguration(color_scale=ScaleConfiguration(show_scale=True)))
        self.assertEqual(
            validate_object(Graph(data=PointsGraphData(xs=[1], ys=[1]), configuration=shown)),
            "no data.colors specified for configuration.points.color_scale.show_scale",
        )
        self.assertEqual(
            validate_object(Graph(data=PointsGraphData(xs=[1], ys=[1], colors=["red"]), configuration=shown)),
            "explicit data.colors specified for configuration.points.color_scale.show_scale",
        )
        self.assertIsNone(
            validate_object(Graph(data=PointsGraphData(xs=[1], ys=[1], colors=[0.5]), configuration=shown))
        )

    def test_numeric_colors_cannot_use_a_categorical_palette(self) -> None:
        graph = Graph(
            data=PointsGraphData(xs=[1], ys=[1], colors=[0.5]),
            configuration=PointsGraphConfiguration(points=PointsConfiguration(color_palette=(("A", "red"),))),
        )
        self.assertIn("numeric data.colors specified for categorical", validate_object(graph))

    def test_single_color_scale_bound_against_a_continuous_palette(self) -> None:
        graph = Graph(
            data=PointsGraphData(xs=[1, 2, 3], ys=[1, 2, 3], colors=[0, 0.5, 1]),
            configuration=PointsGraphConfiguration(
                points=PointsConfiguration(
                    color_palette=((0.0, "red"), (1.0, "blue")),
                    color_scale=ScaleConfiguration(minimum=5),
                )
            ),
        )
        self.assertIn("color_scale.minimum: 5 is not less than the largest", validate_object(graph))
        with self.assertRaises(InvalidObjectError):
            render(graph.data, graph.configuration)

    def test_single_color_scale_bound_against_the_data(self) -> None:
        too_high = Graph(
            data=PointsGraphData(xs=[1, 2], ys=[1, 2], colors=[0, 1]),
            configuration=PointsGraphConfiguration(
                points=PointsConfiguration(color_palette="Viridis", color_scale=ScaleConfiguration(minimum=5))
            ),
        )
        self.assertEqual(
            validate_object(too_high),
            "configuration.points.color_scale.minimum: 5 is not less than the largest numeric data.colors value: 1.0",
        )
        too_low = Graph(
            data=PointsGraphData(xs=[1, 2], ys=[1, 2], colors=[2, 3]),
            configuration=PointsGraphConfiguration(
                points=PointsConfiguration(color_scale=ScaleConfiguration(maximum=1))
            ),
        )
        self.assertEqual(
            validate_object(too_low),
            "configuration.points.color_scale.maximum: 1 is not larger than the smallest numeric data.colors value: 2.0",
        )

    def test_color_scale_bound_inside_the_data_renders(self) -> None:
        figure = render(
            PointsGraphData(xs=[1, 2, 3], ys=[1, 2, 3], colors=[0, 0.5, 1], sizes=[0, 1, 1]),
            PointsGraphConfiguration(points=PointsConfiguration(color_scale=ScaleConfiguration(maximum=0.5))),
        )
        color_axis = figure.layout.color_axis("coloraxis")
        self.assertEqual((color_axis.cmin, color_axis.cmax), (0.0, 0.5))

    def test_percent_stacking_requires_non_negative_values(self) -> None:
        graph = Graph(
            data=BarsGraphData(values=[[1, -2], [1, 1]]),
            configuration=BarsGraphConfiguration(stacking=Stacking.PERCENTS),
        )
        self.assertIn("negative data.values[0][1]", validate_object(graph))

    def test_configuration_kind_must_match_data(self) -> None:
        graph = Graph(data=PointsGraphData(xs=[1], ys=[1]), configuration=LineGraphConfiguration())
        self.assertEqual(
            validate_object(graph),
            "configuration: LineGraphConfiguration does not match data: PointsGraphData",
        )

    def test_children_are_validated_first(self) -> None:
        graph = Graph(
            data=PointsGraphData(xs=[1, 2], ys=[1]),
            configuration=PointsGraphConfiguration(x_axis=AxisConfiguration(minimum=2, maximum=1)),
        )
        self.assertIn("data.ys", validate_object(graph))


if __name__ == "__main__":
    unittest.main()
