"""
Herramientas de registro compartidas por todos los modulos.
"""

from __future__ import annotations

import logging

LOGGER_NAME = "genome_codec"


def setup_logger(level: str = "INFO") -> logging.Logger:
    """Configura un logger estandar reutilizable en toda la libreria."""
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        return logger

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    handler = logging.StreamHandler()
    fmt = "[%(asctime)s] %(levelname)s - %(message)s"
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    return logger


if __name__ == "__main__":
    log = setup_logger("DEBUG")
    log.debug("Telemetria configurada correctamente.")
