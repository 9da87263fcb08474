"""
Resolucion de constructores por introspeccion y clasificacion de fallos de
invocacion.

La resolucion corre una sola vez al construir el codec. El resultado es un
``ConstructorBinding`` opaco: el resto del sistema solo ve "una funcion de
vector real a T".
"""

from __future__ import annotations

import enum
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple

from ..core.errors import CoercionError, ConfigurationError, InvocationError
from .coercion import Coercer, integral_coercer, real_coercer, round_nearest
from .ranges import ParameterRangeSet

CLASS_CALL = "__init__"

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)

FATAL_ERRORS = (MemoryError, RecursionError)


class FailureKind(enum.Enum):
    DOMAIN = "domain"
    MECHANISM = "mechanism"
    FATAL = "fatal"


def classify_failure(exc: BaseException) -> FailureKind:
    """
    Clasifica una excepcion capturada justo en el punto de invocacion.

    Un ``TypeError`` cuyo traceback no llega a ningun frame del codigo
    invocado se produjo en la maquinaria de llamada (clase abstracta,
    argumentos que no encajan, objeto no invocable).
    """
    if not isinstance(exc, Exception) or isinstance(exc, FATAL_ERRORS):
        return FailureKind.FATAL
    if isinstance(exc, TypeError):
        tb = exc.__traceback__
        if tb is None or tb.tb_next is None:
            return FailureKind.MECHANISM
    return FailureKind.DOMAIN


def is_fatal(exc: BaseException) -> bool:
    return classify_failure(exc) is FailureKind.FATAL


@dataclass(frozen=True)
class Outcome:
    """Resultado etiquetado de una invocacion: valor o fallo clasificado."""

    value: Any = None
    error: Optional[Exception] = None
    kind: Optional[FailureKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ConstructorBinding:
    """Constructor resuelto junto con un convertidor por posicion."""

    owner: type
    name: str
    target: Callable[..., Any]
    coercers: Tuple[Coercer, ...]

    @property
    def arity(self) -> int:
        return len(self.coercers)

    @property
    def qualname(self) -> str:
        return f"{self.owner.__qualname__}.{self.name}"

    def coerce(self, values: Sequence[float]) -> List[Any]:
        args: List[Any] = []
        for position, (coercer, value) in enumerate(zip(self.coercers, values)):
            try:
                args.append(coercer(value))
            except (TypeError, ValueError, OverflowError) as exc:
                raise CoercionError(
                    f"No se pudo convertir el alelo {value!r} en la posicion {position} "
                    f"para {self.qualname}: {exc}",
                    position=position,
                    value=value,
                    target=coercer,
                ) from exc
        return args

    def attempt(self, args: Sequence[Any]) -> Outcome:
        try:
            return Outcome(value=self.target(*args))
        except Exception as exc:  # noqa: BLE001 - clasificado y re-lanzado en unwrap
            return Outcome(error=exc, kind=classify_failure(exc))

    def unwrap(self, outcome: Outcome) -> Any:
        """Unica regla de desenvolvimiento: dominio y fatal intactos, mecanismo envuelto."""
        if outcome.error is None:
            return outcome.value
        if outcome.kind is FailureKind.MECHANISM:
            raise InvocationError(
                f"Fallo al invocar {self.qualname}: {outcome.error}",
                type_name=self.owner.__qualname__,
                constructor=self.name,
            ) from outcome.error
        raise outcome.error

    def invoke(self, values: Sequence[float]) -> Any:
        return self.unwrap(self.attempt(self.coerce(values)))


def _signature(obj: Any) -> inspect.Signature:
    try:
        return inspect.signature(obj, eval_str=True)
    except (NameError, SyntaxError, AttributeError):
        # Anotaciones en texto que no se pueden evaluar (p. ej. clases locales).
        return inspect.signature(obj)


def _returns_owner(sig: inspect.Signature, cls: type) -> bool:
    ret = sig.return_annotation
    if ret is cls:
        return True
    if isinstance(ret, str):
        return ret in {cls.__name__, cls.__qualname__, "Self", "typing.Self"}
    return getattr(ret, "_name", None) == "Self"


def declared_constructors(
    cls: type, logger: Optional[logging.Logger] = None
) -> List[Tuple[str, Callable[..., Any], inspect.Signature]]:
    """
    Enumera los constructores declarados de ``cls``: la llamada a la clase y
    los ``classmethod`` publicos de su propio espacio de nombres que
    devuelven ``cls``.
    """
    log = logger or logging.getLogger("genome_codec")
    found: List[Tuple[str, Callable[..., Any], inspect.Signature]] = []
    try:
        found.append((CLASS_CALL, cls, _signature(cls)))
    except (TypeError, ValueError) as exc:
        log.debug("Sin firma inspeccionable para %s: %s", cls.__qualname__, exc)

    for name, attr in vars(cls).items():
        if name.startswith("_") or not isinstance(attr, classmethod):
            continue
        bound = getattr(cls, name)
        try:
            sig = _signature(bound)
        except (TypeError, ValueError) as exc:
            log.debug("Sin firma inspeccionable para %s.%s: %s", cls.__qualname__, name, exc)
            continue
        if _returns_owner(sig, cls):
            found.append((name, bound, sig))
    return found


def match_parameters(
    sig: inspect.Signature,
    ranges: ParameterRangeSet,
    rounding: Callable[[float], int] = round_nearest,
) -> Optional[Tuple[Coercer, ...]]:
    """
    Devuelve los convertidores si la firma encaja con ``ranges`` en aridad y
    tipos; ``None`` en caso contrario.
    """
    positional: List[inspect.Parameter] = []
    for param in sig.parameters.values():
        if param.kind in _POSITIONAL:
            positional.append(param)
        elif param.kind is inspect.Parameter.KEYWORD_ONLY and param.default is param.empty:
            return None
    if len(positional) != len(ranges):
        return None

    coercers: List[Coercer] = []
    for param, rng in zip(positional, ranges):
        if rng.integral:
            coercer = integral_coercer(param.annotation, rounding)
        else:
            coercer = real_coercer(param.annotation)
        if coercer is None:
            return None
        coercers.append(coercer)
    return tuple(coercers)


def resolve_constructor(
    cls: type,
    ranges: ParameterRangeSet,
    *,
    constructor: Optional[str] = None,
    rounding: Callable[[float], int] = round_nearest,
    logger: Optional[logging.Logger] = None,
) -> ConstructorBinding:
    """
    Liga el constructor de ``cls`` que encaja con ``ranges``.

    Sin ``constructor`` solo se considera la llamada a la clase; los
    ``classmethod`` fabrica se usan unicamente cuando se nombran.
    """
    log = logger or logging.getLogger("genome_codec")
    if not inspect.isclass(cls):
        raise ConfigurationError(
            f"Se esperaba una clase, no {cls!r}.", arity=len(ranges)
        )
    type_name = cls.__qualname__
    arity = len(ranges)
    wanted = CLASS_CALL if constructor is None else constructor

    candidates = [c for c in declared_constructors(cls, logger=log) if c[0] == wanted]
    if not candidates:
        raise ConfigurationError(
            f"{type_name} no declara el constructor '{wanted}'.",
            type_name=type_name,
            arity=arity,
            constructor=wanted,
        )

    name, target, sig = candidates[0]
    coercers = match_parameters(sig, ranges, rounding)
    if coercers is None:
        log.debug("Descartado %s.%s%s para aridad %d", type_name, name, sig, arity)
        raise ConfigurationError(
            f"{type_name} no tiene un constructor de aridad {arity} "
            f"compatible con {_kinds(ranges)}.",
            type_name=type_name,
            arity=arity,
            constructor=name,
        )

    binding = ConstructorBinding(cls, name, target, coercers)
    log.debug("Constructor %s%s resuelto (aridad=%d)", binding.qualname, sig, arity)
    return binding


def _kinds(ranges: ParameterRangeSet) -> str:
    return "(" + ", ".join("int" if r.integral else "float" for r in ranges) + ")"


if __name__ == "__main__":
    class _Point:
        def __init__(self, x: float, y: float) -> None:
            self.x, self.y = x, y

    b = resolve_constructor(_Point, ParameterRangeSet.of((0, 1), (0, 1)))
    p = b.invoke([0.25, 0.75])
    print(b.qualname, p.x, p.y)
