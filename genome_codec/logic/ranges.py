"""
Conjunto ordenado de rangos numericos, uno por parametro del constructor.
"""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Sequence, Tuple, Union

import numpy as np

from ..core.errors import ConfigurationError


def _finite(value: Any, name: str) -> float:
    try:
        out = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name}={value!r} no es un numero real.") from exc
    if not math.isfinite(out):
        raise ConfigurationError(f"{name}={value!r} debe ser finito.")
    return out


@dataclass(frozen=True)
class ParameterRange:
    """Intervalo cerrado [low, high] legal para una posicion del genoma."""

    low: float
    high: float

    integral = False

    def __post_init__(self) -> None:
        low = _finite(self.low, "low")
        high = _finite(self.high, "high")
        if low > high:
            raise ConfigurationError(
                f"Rango invalido: low={low} es mayor que high={high}.",
                low=low,
                high=high,
            )
        object.__setattr__(self, "low", low)
        object.__setattr__(self, "high", high)

    def __contains__(self, value: Any) -> bool:
        return self.low <= float(value) <= self.high

    def as_tuple(self) -> Tuple[float, float]:
        return self.low, self.high


@dataclass(frozen=True)
class IntRange(ParameterRange):
    """
    Rango de una posicion entera.

    El genoma sigue guardando un alelo real en esa posicion; el decodificador
    lo redondea antes de invocar al constructor.
    """

    low: int
    high: int

    integral = True

    def __post_init__(self) -> None:
        for name, raw in (("low", self.low), ("high", self.high)):
            val = _finite(raw, name)
            if not val.is_integer():
                raise ConfigurationError(f"IntRange.{name}={raw!r} debe ser entero.")
        low, high = int(float(self.low)), int(float(self.high))
        if low > high:
            raise ConfigurationError(
                f"Rango invalido: low={low} es mayor que high={high}.",
                low=low,
                high=high,
            )
        object.__setattr__(self, "low", low)
        object.__setattr__(self, "high", high)


RangeLike = Union[ParameterRange, Sequence[float]]


def _as_range(item: RangeLike, idx: int) -> ParameterRange:
    if isinstance(item, ParameterRange):
        return item
    try:
        low, high = item
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            f"ranges[{idx}] debe ser un par (min, max); se recibio {item!r}.",
            position=idx,
        ) from exc
    return ParameterRange(low, high)


class ParameterRangeSet:
    """
    Secuencia inmutable de rangos; la posicion i corresponde al parametro
    formal i del constructor.
    """

    __slots__ = ("_ranges",)

    def __init__(self, ranges: Iterable[RangeLike] = ()) -> None:
        object.__setattr__(
            self, "_ranges", tuple(_as_range(r, i) for i, r in enumerate(ranges))
        )

    @classmethod
    def of(cls, *ranges: RangeLike) -> "ParameterRangeSet":
        return cls(ranges)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("ParameterRangeSet es inmutable.")

    @property
    def arity(self) -> int:
        return len(self._ranges)

    def __len__(self) -> int:
        return len(self._ranges)

    def __getitem__(self, index: int) -> ParameterRange:
        try:
            index = operator.index(index)
        except TypeError:
            raise TypeError(f"El indice debe ser entero, no {type(index).__name__}.") from None
        if not 0 <= index < len(self._ranges):
            raise IndexError(
                f"Posicion {index} fuera de rango para aridad {len(self._ranges)}."
            )
        return self._ranges[index]

    def __iter__(self) -> Iterator[ParameterRange]:
        return iter(self._ranges)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParameterRangeSet):
            return NotImplemented
        return self._ranges == other._ranges

    def __hash__(self) -> int:
        return hash(self._ranges)

    def __repr__(self) -> str:
        body = ", ".join(
            f"{'int' if r.integral else ''}[{r.low}, {r.high}]" for r in self._ranges
        )
        return f"ParameterRangeSet({body})"

    @property
    def lows(self) -> np.ndarray:
        return np.array([r.low for r in self._ranges], dtype=float)

    @property
    def highs(self) -> np.ndarray:
        return np.array([r.high for r in self._ranges], dtype=float)

    @property
    def integral_positions(self) -> Tuple[int, ...]:
        return tuple(i for i, r in enumerate(self._ranges) if r.integral)

    def contains(self, genome: Any) -> bool:
        """Indica si ``genome`` tiene la aridad correcta y cada alelo en su rango."""
        values = np.asarray(genome, dtype=float)
        if values.ndim != 1 or values.shape[0] != len(self._ranges):
            return False
        return bool(np.all((values >= self.lows) & (values <= self.highs)))


if __name__ == "__main__":
    rs = ParameterRangeSet.of((-10.0, 10.0), IntRange(0, 5))
    print(rs, rs.lows, rs.highs, rs.contains([1.0, 3.0]))
