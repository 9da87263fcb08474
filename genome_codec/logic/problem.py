"""
Puente hacia pymoo: expone un codec como ``Problem`` de un solo objetivo.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import numpy as np
from pymoo.core.problem import Problem

from ..core.errors import CodecError
from .codec import ConstructorCodec
from .resolution import is_fatal


class CodecProblem(Problem):
    """
    Problema de minimizacion cuyas variables son los alelos del codec.

    Cada fila de ``X`` se decodifica y se evalua con ``fitness``. Un error de
    dominio (lanzado por el constructor del tipo o por ``fitness``) marca al
    candidato con ``penalty``; los errores del propio codec y los fatales se
    propagan.
    """

    def __init__(
        self,
        codec: ConstructorCodec[Any],
        fitness: Callable[[Any], float],
        *,
        penalty: float = float("inf"),
        logger: Optional[logging.Logger] = None,
    ) -> None:
        ranges = codec.ranges
        super().__init__(
            n_var=len(ranges),
            n_obj=1,
            n_ieq_constr=0,
            xl=ranges.lows,
            xu=ranges.highs,
        )
        self.codec = codec
        self.fitness = fitness
        self.penalty = float(penalty)
        self.logger = logger or logging.getLogger("genome_codec")
        self.rejected = 0

    def evaluate_one(self, genome: Any) -> float:
        try:
            value = self.codec.decode(genome)
            return float(self.fitness(value))
        except CodecError:
            raise
        except Exception as exc:
            if is_fatal(exc):
                raise
            self.rejected += 1
            self.logger.debug(
                "Candidato rechazado %s: %s",
                np.asarray(genome).tolist(),
                exc,
                exc_info=True,
            )
            return self.penalty

    def _evaluate(self, X, out, *args, **kwargs):
        X = np.atleast_2d(X)
        out["F"] = np.array([[self.evaluate_one(row)] for row in X], dtype=float).reshape(
            len(X), 1
        )


if __name__ == "__main__":
    from dataclasses import dataclass

    @dataclass
    class Point:
        x: float
        y: float

    codec = ConstructorCodec.of(Point, (-5.0, 5.0), (-5.0, 5.0))
    problem = CodecProblem(codec, lambda p: p.x**2 + p.y**2)
    X = codec.encoding().sample(4)
    print(problem.evaluate(X, return_as_dictionary=True)["F"])
