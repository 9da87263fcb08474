"""
Capa logica: rangos de parametros, resolucion de constructores y codecs.

El puente con pymoo vive en ``logic.problem`` y se importa aparte para no
cargar pymoo al importar el paquete.
"""

from .ranges import IntRange, ParameterRange, ParameterRangeSet  # noqa: F401
from .resolution import ConstructorBinding, FailureKind, classify_failure  # noqa: F401
from .codec import Codec, ConstructorCodec, GenomeFactory, build  # noqa: F401

__all__ = [
    "IntRange",
    "ParameterRange",
    "ParameterRangeSet",
    "ConstructorBinding",
    "FailureKind",
    "classify_failure",
    "Codec",
    "ConstructorCodec",
    "GenomeFactory",
    "build",
]


if __name__ == "__main__":
    import numpy as np

    ranges = ParameterRangeSet.of((0.0, 1.0), IntRange(1, 3))
    print("Rangos preparados:", ranges, GenomeFactory(ranges, np.random.default_rng(0))())
