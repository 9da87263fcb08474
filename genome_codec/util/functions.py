"""
Funciones genericas sin estado: conversiones numericas y combinadores de
predicados de un argumento.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

import numpy as np

from ..core.errors import ConfigurationError

T = TypeVar("T")
Predicate = Callable[[T], bool]


def object_to_string(value: Any) -> str:
    return str(value)


def string_to_int(text: str) -> int:
    return int(text.strip())


def string_to_float(text: str) -> float:
    return float(text.strip())


def float64_to_float(value: np.float64) -> float:
    return float(value)


def float_to_float64(value: float) -> np.float64:
    return np.float64(value)


def int64_to_int(value: np.int64) -> int:
    return int(value)


def int_to_int64(value: int) -> np.int64:
    return np.int64(value)


def is_none(value: Any) -> bool:
    return value is None


def _require(predicate: Optional[Callable[..., Any]], name: str) -> Callable[..., Any]:
    if predicate is None:
        raise ConfigurationError(f"El predicado '{name}' no puede ser None.")
    if not callable(predicate):
        raise ConfigurationError(f"El predicado '{name}' debe ser invocable: {predicate!r}.")
    return predicate


class _Not:
    __slots__ = ("a",)

    def __init__(self, a: Predicate[Any]) -> None:
        self.a = _require(a, "a")

    def __call__(self, value: Any) -> bool:
        return not self.a(value)

    def __repr__(self) -> str:
        return f"Not[{self.a!r}]"


class _And:
    __slots__ = ("a", "b")

    def __init__(self, a: Predicate[Any], b: Predicate[Any]) -> None:
        self.a = _require(a, "a")
        self.b = _require(b, "b")

    def __call__(self, value: Any) -> bool:
        return bool(self.a(value)) and bool(self.b(value))

    def __repr__(self) -> str:
        return f"And[{self.a!r}, {self.b!r}]"


class _Or:
    __slots__ = ("a", "b")

    def __init__(self, a: Predicate[Any], b: Predicate[Any]) -> None:
        self.a = _require(a, "a")
        self.b = _require(b, "b")

    def __call__(self, value: Any) -> bool:
        return bool(self.a(value)) or bool(self.b(value))

    def __repr__(self) -> str:
        return f"Or[{self.a!r}, {self.b!r}]"


def not_(a: Predicate[T]) -> Predicate[T]:
    """Niega el resultado de ``a``. Lanza ``ConfigurationError`` si ``a`` es None."""
    return _Not(a)


def and_(a: Predicate[T], b: Predicate[T]) -> Predicate[T]:
    """Conjuncion con cortocircuito: ``b`` solo se evalua si ``a`` es verdadero."""
    return _And(a, b)


def or_(a: Predicate[T], b: Predicate[T]) -> Predicate[T]:
    """Disyuncion con cortocircuito: ``b`` solo se evalua si ``a`` es falso."""
    return _Or(a, b)


if __name__ == "__main__":
    positive = lambda x: x > 0  # noqa: E731
    print(not_(is_none), and_(positive, not_(is_none))(3), or_(is_none, positive)(-1))
