from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from luvatrix_graphs.configuration import GraphConfiguration
from luvatrix_graphs.data import GraphData
from luvatrix_graphs.figure import Figure
from luvatrix_graphs.graph import Graph, default_configuration, graph_kind
from luvatrix_graphs.render import render_graph
from luvatrix_graphs.validation import assert_valid_object

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


def render(data: GraphData, configuration: GraphConfiguration | None = None) -> Figure:
    """Validate a graph and build its traces and layout.

    Without a configuration, the defaults for the data's graph kind are used. Invalid input
    raises `InvalidObjectError`; call `validate_object` first to get the message instead.
    """
    kind = graph_kind(data)
    if configuration is None:
        configuration = default_configuration(kind)
    graph = Graph(data=data, configuration=configuration)
    assert_valid_object(graph)
    LOGGER.debug("rendering %s graph", kind.value)
    return render_graph(graph)


def with_overrides(obj: T, overrides: Mapping[str, Any]) -> T:
    """Copy a frozen configuration (or data) object with some fields replaced.

    Keys are dotted field paths, e.g. `{"x_axis.log_regularization": 0.0}`.
    """
    for path, value in overrides.items():
        obj = _replace_path(obj, path.split("."), value, path)
    return obj


def _replace_path(obj: Any, names: list[str], value: Any, path: str) -> Any:
    head, *rest = names
    if not dataclasses.is_dataclass(obj) or head not in {field.name for field in dataclasses.fields(obj)}:
        raise AttributeError(f"{type(obj).__name__} has no field {head!r} (in override {path!r})")
    if rest:
        value = _replace_path(getattr(obj, head), rest, value, path)
    return dataclasses.replace(obj, **{head: value})
