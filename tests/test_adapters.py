from __future__ import annotations

from decimal import Decimal
import importlib.util
import unittest

import numpy as np

from luvatrix_graphs import GridGraphData, LinesGraphData, PlotDataError, PointsGraphData, validate_object
from luvatrix_graphs.adapters import coerce_edges, coerce_numeric, coerce_numeric_vectors, coerce_strings


class CoercionTests(unittest.TestCase):
    def test_numeric_sequences_become_float64(self) -> None:
        arr = coerce_numeric([1, Decimal("2.5"), None], label="xs")
        self.assertEqual(arr.dtype, np.float64)
        self.assertEqual(arr[1], 2.5)
        self.assertTrue(np.isnan(arr[2]))

    def test_strings_are_not_numbers(self) -> None:
        with self.assertRaises(PlotDataError):
            coerce_numeric([1, "2"], label="xs")
        with self.assertRaises(PlotDataError):
            coerce_numeric(np.zeros((2, 2)), label="xs")

    def test_vectors_may_differ_in_length(self) -> None:
        vectors = coerce_numeric_vectors([[1, 2, 3], [4]], label="xs")
        self.assertEqual([vector.size for vector in vectors], [3, 1])

    def test_strings_and_edges(self) -> None:
        self.assertEqual(coerce_strings(np.asarray(["a", "b"]), label="names"), ("a", "b"))
        with self.assertRaises(PlotDataError):
            coerce_strings(["a", 1], label="names")
        self.assertEqual(coerce_edges(np.asarray([[0, 1], [1, 2]]), label="edges"), ((0, 1), (1, 2)))
        with self.assertRaises(PlotDataError):
            coerce_edges([(0, 1.5)], label="edges")

    @unittest.skipUnless(importlib.util.find_spec("pandas") is not None, "pandas not installed")
    def test_pandas_inputs(self) -> None:
        import pandas as pd

        data = PointsGraphData(xs=pd.Series([1, 2, 3]), ys=pd.Series([3.0, 2.0, 1.0]))
        self.assertEqual(data.xs.tolist(), [1.0, 2.0, 3.0])
        frame = pd.DataFrame({"a": [1, 2], "b": [3, 4]})
        lines = LinesGraphData(xs=[[0, 1], [0, 1]], ys=frame)
        self.assertEqual([vector.tolist() for vector in lines.ys], [[1.0, 2.0], [3.0, 4.0]])

    @unittest.skipUnless(importlib.util.find_spec("torch") is not None, "torch not installed")
    def test_torch_inputs(self) -> None:
        import torch

        data = PointsGraphData(xs=torch.tensor([1, 2]), ys=torch.tensor([0.5, 1.5]))
        self.assertEqual(data.ys.tolist(), [0.5, 1.5])


class GridCoercionTests(unittest.TestCase):
    def test_matrices_keep_their_shape(self) -> None:
        data = GridGraphData(colors=[["red", ""], ["blue", "green"]], sizes=np.ones((2, 2)))
        self.assertEqual(data.shape, (2, 2))
        self.assertEqual(len(data.flat_colors), 4)
        self.assertIsNone(validate_object(data))

    def test_shape_mismatch_is_reported(self) -> None:
        data = GridGraphData(colors=[["red", "blue"]], sizes=np.ones((2, 2)))
        self.assertEqual(
            validate_object(data),
            "the shape of data.sizes: 2x2 is different from the grid shape: 1x2",
        )

    def test_ragged_rows_are_rejected(self) -> None:
        with self.assertRaises(PlotDataError):
            GridGraphData(colors=[["red", "blue"], ["red"]])


if __name__ == "__main__":
    unittest.main()
