from luvatrix_graphs.adapters.normalize import (
    coerce_edges,
    coerce_matrix,
    coerce_numeric,
    coerce_numeric_vectors,
    coerce_optional_numeric,
    coerce_strings,
)

__all__ = [
    "coerce_edges",
    "coerce_matrix",
    "coerce_numeric",
    "coerce_numeric_vectors",
    "coerce_optional_numeric",
    "coerce_strings",
]
