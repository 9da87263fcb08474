"""
Codec por constructor: fabrica de genomas reales acotados y decodificador
que reconstruye instancias del tipo objetivo.
"""

from __future__ import annotations

import abc
import logging
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar, Union

import numpy as np

from ..core.config import CodecConfig
from ..core.errors import ConfigurationError, InvocationError
from .coercion import resolve_rounding
from .ranges import ParameterRangeSet, RangeLike
from .resolution import ConstructorBinding, resolve_constructor

T = TypeVar("T")

Genome = Union[np.ndarray, Iterable[float]]


class GenomeFactory:
    """
    Produce genomas frescos e independientes dentro de los rangos.

    El generador no se serializa entre hilos: si varios hilos comparten la
    fabrica, el llamador es responsable de sincronizar el acceso.
    """

    def __init__(self, ranges: ParameterRangeSet, rng: np.random.Generator) -> None:
        self.ranges = ranges
        self._rng = rng
        self._lows = ranges.lows
        self._highs = ranges.highs
        self._int_mask = np.array([r.integral for r in ranges], dtype=bool)
        self._int_lows = self._lows[self._int_mask].astype(np.int64)
        self._int_highs = self._highs[self._int_mask].astype(np.int64)

    @property
    def arity(self) -> int:
        return len(self.ranges)

    def __call__(self) -> np.ndarray:
        genome = self._rng.uniform(self._lows, self._highs)
        if self._int_mask.any():
            genome[self._int_mask] = self._rng.integers(
                self._int_lows, self._int_highs, endpoint=True
            )
        return genome

    def sample(self, n: int) -> np.ndarray:
        """Devuelve ``n`` genomas apilados en una matriz (n, aridad)."""
        out = np.empty((max(0, int(n)), self.arity), dtype=float)
        for row in out:
            row[:] = self()
        return out

    def __repr__(self) -> str:
        return f"GenomeFactory({self.ranges!r})"


class Codec(abc.ABC, Generic[T]):
    """Par fabrica de codificacion / decodificador entre genomas y valores."""

    @abc.abstractmethod
    def encoding(self) -> Callable[[], Any]:
        ...

    @abc.abstractmethod
    def decoder(self) -> Callable[[Any], T]:
        ...

    def decode(self, genome: Genome) -> T:
        return self.decoder()(genome)

    @staticmethod
    def of(encoding: Callable[[], Any], decoder: Callable[[Any], T]) -> "Codec[T]":
        return _FunctionCodec(encoding, decoder)


class _FunctionCodec(Codec[T]):
    def __init__(self, encoding: Callable[[], Any], decoder: Callable[[Any], T]) -> None:
        if encoding is None or decoder is None:
            raise ConfigurationError("encoding y decoder son obligatorios.")
        self._encoding = encoding
        self._decoder = decoder

    def encoding(self) -> Callable[[], Any]:
        return self._encoding

    def decoder(self) -> Callable[[Any], T]:
        return self._decoder


class ConstructorCodec(Codec[T]):
    """
    Codec que decodifica genomas invocando un constructor de ``type_``.

    El constructor se resuelve una sola vez aqui; si la resolucion falla se
    lanza ``ConfigurationError`` y el codec no llega a existir. Tras la
    construccion el objeto es inmutable y ``decode`` puede invocarse desde
    varios hilos a la vez.
    """

    def __init__(
        self,
        type_: type,
        ranges: Union[ParameterRangeSet, Iterable[RangeLike]],
        *,
        constructor: Optional[str] = None,
        config: Optional[CodecConfig] = None,
        rng: Optional[np.random.Generator] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.cfg = config or CodecConfig()
        self.logger = logger or logging.getLogger("genome_codec")
        range_set = ranges if isinstance(ranges, ParameterRangeSet) else ParameterRangeSet(ranges)
        rounding = resolve_rounding(self.cfg.int_rounding)
        self._binding: ConstructorBinding = resolve_constructor(
            type_,
            range_set,
            constructor=constructor,
            rounding=rounding,
            logger=self.logger,
        )
        self._type = type_
        self._ranges = range_set
        self._encoding = GenomeFactory(range_set, rng if rng is not None else self.cfg.make_rng())

    @classmethod
    def of(cls, type_: type, *ranges: RangeLike, **kwargs: Any) -> "ConstructorCodec[T]":  # type: ignore[override]
        return cls(type_, ParameterRangeSet(ranges), **kwargs)

    @property
    def type(self) -> type:
        return self._type

    @property
    def ranges(self) -> ParameterRangeSet:
        return self._ranges

    @property
    def binding(self) -> ConstructorBinding:
        return self._binding

    @property
    def arity(self) -> int:
        return self._binding.arity

    def encoding(self) -> GenomeFactory:
        return self._encoding

    def decoder(self) -> Callable[[Any], T]:
        return self.decode

    def decode(self, genome: Genome) -> T:
        binding = self._binding
        try:
            values = np.asarray(genome, dtype=float)
        except (TypeError, ValueError) as exc:
            raise InvocationError(
                f"No se pudo extraer un vector real del genoma para {binding.qualname}: {exc}",
                type_name=self._type.__qualname__,
                constructor=binding.name,
            ) from exc
        if values.ndim != 1 or values.shape[0] != binding.arity:
            raise InvocationError(
                f"{binding.qualname} espera un genoma de longitud {binding.arity}; "
                f"se recibio forma {values.shape}.",
                type_name=self._type.__qualname__,
                constructor=binding.name,
            )
        return binding.invoke(values.tolist())

    def __repr__(self) -> str:
        return f"ConstructorCodec({self._binding.qualname}, {self._ranges!r})"


def build(
    type_: type,
    ranges: Union[ParameterRangeSet, Iterable[RangeLike]],
    **kwargs: Any,
) -> ConstructorCodec[Any]:
    """Punto de entrada: resuelve el constructor y devuelve el codec listo."""
    return ConstructorCodec(type_, ranges, **kwargs)


if __name__ == "__main__":
    from dataclasses import dataclass

    @dataclass
    class Point:
        x: float
        y: float

    codec = build(Point, [(-10, 10), (-10, 10)], config=CodecConfig(seed=1))
    g = codec.encoding()()
    print(g, codec.decode(g), codec.decode([3.5, -2.0]))
