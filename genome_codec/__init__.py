"""
Paquete raiz de genome_codec: convierte tipos de usuario en genomas reales
de longitud fija y de vuelta, resolviendo sus constructores por
introspeccion.

Capas: nucleo compartido (configuracion, registro, errores), logica (rangos,
resolucion, codec, puente pymoo) y utilidades genericas.
"""

from .core.config import CodecConfig, set_global_seeds  # noqa: F401
from .core.errors import (  # noqa: F401
    CodecError,
    CoercionError,
    ConfigurationError,
    InvocationError,
)
from .core.telemetry import setup_logger  # noqa: F401
from .logic.codec import Codec, ConstructorCodec, GenomeFactory, build  # noqa: F401
from .logic.ranges import IntRange, ParameterRange, ParameterRangeSet  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "CodecConfig",
    "set_global_seeds",
    "setup_logger",
    "CodecError",
    "CoercionError",
    "ConfigurationError",
    "InvocationError",
    "Codec",
    "ConstructorCodec",
    "GenomeFactory",
    "build",
    "IntRange",
    "ParameterRange",
    "ParameterRangeSet",
]


if __name__ == "__main__":
    logger = setup_logger()
    logger.info("Inicializacion basica completada.")
    print(CodecConfig())
