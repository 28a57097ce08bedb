from __future__ import annotations


class PlotDataError(ValueError):
    """Raised when caller arrays cannot be coerced into graph data."""


class InvalidObjectError(AssertionError):
    """Raised by `assert_valid_object` when a graph object fails validation.

    Rendering code assumes its inputs were validated up front, so hitting this is a
    bug in the caller rather than bad user input.
    """
