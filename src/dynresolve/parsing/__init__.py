"""Signature parsing and descriptor encoding."""

from dynresolve.parsing.descriptor import (
    MAX_ARRAY_DIMENSIONS,
    array_descriptor,
    array_dimensions,
    descriptor_for,
    parse_descriptor,
)
from dynresolve.parsing.signature import (
    parse_constructor_signature,
    parse_method_signature,
    split_parameters,
)

__all__ = [
    "MAX_ARRAY_DIMENSIONS",
    "array_descriptor",
    "array_dimensions",
    "descriptor_for",
    "parse_constructor_signature",
    "parse_descriptor",
    "parse_method_signature",
    "split_parameters",
]
