from luvatrix_graphs.api import render, with_overrides
from luvatrix_graphs.colors import EMPTY_COLOR, EmptyColor, NamedColor, NumericColor, is_valid_color
from luvatrix_graphs.configuration import (
    AxisConfiguration,
    BandConfiguration,
    BandsConfiguration,
    BarGraphConfiguration,
    BarsGraphConfiguration,
    CdfDirection,
    CdfGraphConfiguration,
    CdfsGraphConfiguration,
    DistributionConfiguration,
    DistributionGraphConfiguration,
    DistributionsGraphConfiguration,
    FigureConfiguration,
    GridGraphConfiguration,
    LineConfiguration,
    LineGraphConfiguration,
    LinesGraphConfiguration,
    PointsConfiguration,
    PointsGraphConfiguration,
    ScaleConfiguration,
    SizeRangeConfiguration,
    Stacking,
    ValuesOrientation,
)
from luvatrix_graphs.data import (
    BarGraphData,
    BarsGraphData,
    CdfGraphData,
    CdfsGraphData,
    DistributionGraphData,
    DistributionsGraphData,
    GridGraphData,
    LineGraphData,
    LinesGraphData,
    PointsGraphData,
)
from luvatrix_graphs.errors import InvalidObjectError, PlotDataError
from luvatrix_graphs.figure import AxisLayout, ColorAxisLayout, Figure, Layout, Trace
from luvatrix_graphs.graph import Graph, GraphKind
from luvatrix_graphs.validation import assert_valid_object, validate_object

__all__ = [
    "AxisConfiguration",
    "AxisLayout",
    "BandConfiguration",
    "BandsConfiguration",
    "BarGraphConfiguration",
    "BarGraphData",
    "BarsGraphConfiguration",
    "BarsGraphData",
    "CdfDirection",
    "CdfGraphConfiguration",
    "CdfGraphData",
    "CdfsGraphConfiguration",
    "CdfsGraphData",
    "ColorAxisLayout",
    "DistributionConfiguration",
    "DistributionGraphConfiguration",
    "DistributionGraphData",
    "DistributionsGraphConfiguration",
    "DistributionsGraphData",
    "EMPTY_COLOR",
    "EmptyColor",
    "Figure",
    "FigureConfiguration",
    "Graph",
    "GraphKind",
    "GridGraphConfiguration",
    "GridGraphData",
    "InvalidObjectError",
    "Layout",
    "LineConfiguration",
    "LineGraphConfiguration",
    "LineGraphData",
    "LinesGraphConfiguration",
    "LinesGraphData",
    "NamedColor",
    "NumericColor",
    "PlotDataError",
    "PointsConfiguration",
    "PointsGraphConfiguration",
    "PointsGraphData",
    "ScaleConfiguration",
    "SizeRangeConfiguration",
    "Stacking",
    "Trace",
    "ValuesOrientation",
    "assert_valid_object",
    "is_valid_color",
    "render",
    "validate_object",
    "with_overrides",
]
