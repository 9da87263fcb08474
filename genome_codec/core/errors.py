"""
Taxonomia de errores del codec.

Solo los errores propios de la libreria viven aqui. Las excepciones que
lanza la logica de dominio de un tipo construido nunca se envuelven: el
decodificador las propaga intactas.
"""

from __future__ import annotations

from typing import Any, Optional


class CodecError(Exception):
    """Base de todos los errores emitidos por ``genome_codec``."""


class ConfigurationError(CodecError, ValueError):
    """
    Error de configuracion detectado al construir un codec.

    Cubre limites de rango invalidos, constructores inexistentes o que no encajan,
    politicas de redondeo desconocidas y predicados ausentes.
    """

    def __init__(
        self,
        message: str,
        *,
        type_name: Optional[str] = None,
        arity: Optional[int] = None,
        **context: Any,
    ) -> None:
        super().__init__(message)
        self.type_name = type_name
        self.arity = arity
        self.context = context


class CoercionError(CodecError, TypeError):
    """Un alelo no pudo convertirse al tipo del parametro ya resuelto."""

    def __init__(self, message: str, *, position: int, value: Any, target: Any) -> None:
        super().__init__(message)
        self.position = position
        self.value = value
        self.target = target


class InvocationError(CodecError, RuntimeError):
    """Fallo del mecanismo de construccion, distinto de un error de dominio."""

    def __init__(self, message: str, *, type_name: str, constructor: str) -> None:
        super().__init__(message)
        self.type_name = type_name
        self.constructor = constructor


__all__ = ["CodecError", "ConfigurationError", "CoercionError", "InvocationError"]
