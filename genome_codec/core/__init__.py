"""
Componentes compartidos por todas las capas: configuracion, telemetria y
taxonomia de errores.
"""

from .config import CodecConfig, set_global_seeds  # noqa: F401
from .errors import (  # noqa: F401
    CodecError,
    CoercionError,
    ConfigurationError,
    InvocationError,
)
from .telemetry import setup_logger  # noqa: F401

__all__ = [
    "CodecConfig",
    "set_global_seeds",
    "setup_logger",
    "CodecError",
    "CoercionError",
    "ConfigurationError",
    "InvocationError",
]


if __name__ == "__main__":
    logger = setup_logger()
    logger.info("Core module smoke test completado.")
