"""
Conversion numerica entre los alelos reales del genoma y los tipos
declarados por los parametros del constructor.
"""

from __future__ import annotations

import inspect
import math
import numbers
import types
import typing
from typing import Any, Callable, Dict, Optional

import numpy as np

from ..core.errors import ConfigurationError

Coercer = Callable[[float], Any]

_REAL_TYPES = (float, numbers.Real, numbers.Number)
_INTEGRAL_TYPES = (int, numbers.Integral)
_NAMED: Dict[str, Any] = {
    "float": float,
    "int": int,
    "Any": Any,
    "typing.Any": Any,
    "numbers.Real": numbers.Real,
    "numbers.Integral": numbers.Integral,
}
_ABSTRACT_NUMPY = {
    np.floating: np.float64,
    np.integer: np.int64,
    np.signedinteger: np.int64,
    np.unsignedinteger: np.uint64,
}


def round_nearest(value: float) -> int:
    """Redondea al entero mas cercano; las mitades se alejan de cero."""
    magnitude = abs(value)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return -whole if value < 0 else whole


def round_trunc(value: float) -> int:
    return math.trunc(value)


ROUNDING: Dict[str, Callable[[float], int]] = {
    "nearest": round_nearest,
    "trunc": round_trunc,
}


def resolve_rounding(policy: str) -> Callable[[float], int]:
    try:
        return ROUNDING[policy]
    except KeyError:
        raise ConfigurationError(
            f"Politica de redondeo '{policy}' no soportada; opciones: {sorted(ROUNDING)}.",
            policy=policy,
        ) from None


def unwrap_optional(annotation: Any) -> Any:
    """Reduce ``Optional[X]`` / ``X | None`` a ``X``; deja el resto intacto."""
    if isinstance(annotation, str):
        return _NAMED.get(annotation, annotation)
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is getattr(types, "UnionType", None):
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _is_unconstrained(annotation: Any) -> bool:
    return annotation is inspect.Parameter.empty or annotation is Any


def real_coercer(annotation: Any) -> Optional[Coercer]:
    """
    Devuelve el convertidor para una posicion real, o ``None`` si el tipo
    declarado no admite un valor de punto flotante.
    """
    annotation = unwrap_optional(annotation)
    if _is_unconstrained(annotation) or annotation in _REAL_TYPES:
        return float
    if isinstance(annotation, type) and issubclass(annotation, np.floating):
        return _ABSTRACT_NUMPY.get(annotation, annotation)
    return None


def integral_coercer(
    annotation: Any, rounding: Callable[[float], int]
) -> Optional[Coercer]:
    """Como ``real_coercer`` pero para posiciones enteras, aplicando ``rounding``."""
    annotation = unwrap_optional(annotation)
    if _is_unconstrained(annotation) or annotation in _INTEGRAL_TYPES:
        return rounding
    if isinstance(annotation, type) and issubclass(annotation, np.integer):
        target = _ABSTRACT_NUMPY.get(annotation, annotation)

        def _to_numpy(value: float) -> Any:
            return target(rounding(value))

        return _to_numpy
    return None


if __name__ == "__main__":
    print("float ->", real_coercer(float)(1))
    print("np.float32 ->", real_coercer(np.float32)(1.5))
    print("int ->", integral_coercer(int, round_nearest)(-2.5))
