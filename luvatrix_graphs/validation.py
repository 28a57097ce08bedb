"""Validation of graph data and configuration objects.

Each field of a configuration can be checked on its own by whatever builds it (a form,
a script). The combination of individually valid fields can still be inconsistent, so
every object also knows how to validate itself as a whole. Validation returns a message
instead of raising, so it can be shown to whoever is building the graph; rendering calls
`assert_valid_object`, which treats a message as a fatal error.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Any

from luvatrix_graphs.errors import InvalidObjectError


class ObjectWithValidation:
    """Base for objects that `validate_object` accepts.

    Subclasses override `validate`, returning `None` when consistent or a message
    naming the offending field by its dotted `path`.
    """

    validation_root = "configuration"

    def validate(self, path: str) -> str | None:  # noqa: ARG002
        return None


def validate_object(obj: ObjectWithValidation, path: str | None = None) -> str | None:
    return obj.validate(obj.validation_root if path is None else path)


def assert_valid_object(obj: ObjectWithValidation, path: str | None = None) -> None:
    message = validate_object(obj, path)
    if message is not None:
        raise InvalidObjectError(message)


def field_path(path: str, name: str) -> str:
    if not path:
        return name
    return f"{path}.{name}"


def first_message(messages: Iterable[str | None]) -> str | None:
    for message in messages:
        if message is not None:
            return message
    return None


def validate_children(path: str, children: Iterable[tuple[str, ObjectWithValidation | None]]) -> str | None:
    for name, child in children:
        if child is None:
            continue
        message = child.validate(field_path(path, name))
        if message is not None:
            return message
    return None


def validate_bounds(path: str, minimum: float | None, maximum: float | None, log_regularization: float | None) -> str | None:
    """Shared rules of axes and scales: ordered bounds and a loggable shifted domain."""
    if minimum is not None and not _is_finite(minimum):
        return f"non-finite {field_path(path, 'minimum')}: {minimum}"
    if maximum is not None and not _is_finite(maximum):
        return f"non-finite {field_path(path, 'maximum')}: {maximum}"
    if minimum is not None and maximum is not None and not maximum > minimum:
        return (
            f"{field_path(path, 'maximum')}: {maximum} "
            f"is not larger than {field_path(path, 'minimum')}: {minimum}"
        )
    if log_regularization is None:
        return None
    if not _is_finite(log_regularization) or log_regularization < 0:
        return f"negative {field_path(path, 'log_regularization')}: {log_regularization}"
    for name, bound in (("minimum", minimum), ("maximum", maximum)):
        if bound is not None and not bound + log_regularization > 0:
            return (
                f"non-positive log {field_path(path, name)}: {bound} "
                f"+ {field_path(path, 'log_regularization')}: {log_regularization}"
            )
    return None


def validate_open_bounds(
    path: str, minimum: float | None, maximum: float | None, values_name: str, smallest: float, largest: float
) -> str | None:
    """A single configured bound must leave room for the values that supply the other one."""
    if minimum is not None and maximum is None and not minimum < largest:
        return f"{field_path(path, 'minimum')}: {minimum} is not less than the largest {values_name}: {largest}"
    if maximum is not None and minimum is None and not maximum > smallest:
        return f"{field_path(path, 'maximum')}: {maximum} is not larger than the smallest {values_name}: {smallest}"
    return None


def validate_length(path: str, name: str, values: Any, expected_name: str, expected: int) -> str | None:
    if values is None or len(values) == expected:
        return None
    return (
        f"the number of {field_path(path, name)}: {len(values)} "
        f"is different from the number of {field_path(path, expected_name)}: {expected}"
    )


def _is_finite(value: float) -> bool:
    try:
        return math.isfinite(value)
    except TypeError:
        return False
