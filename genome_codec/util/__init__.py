"""
Utilidades genericas: conversiones y combinadores de predicados.
"""

from .functions import (  # noqa: F401
    and_,
    float64_to_float,
    float_to_float64,
    int64_to_int,
    int_to_int64,
    is_none,
    not_,
    object_to_string,
    or_,
    string_to_float,
    string_to_int,
)

__all__ = [
    "and_",
    "float64_to_float",
    "float_to_float64",
    "int64_to_int",
    "int_to_int64",
    "is_none",
    "not_",
    "object_to_string",
    "or_",
    "string_to_float",
    "string_to_int",
]
