from __future__ import annotations

import abc
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pytest

from genome_codec import (
    Codec,
    CodecConfig,
    CoercionError,
    ConfigurationError,
    ConstructorCodec,
    IntRange,
    InvocationError,
    ParameterRangeSet,
    build,
)


@dataclass(frozen=True)
class Point:
    x: float
    y: float


class InvalidRadius(ValueError):
    pass


class PositiveRadius:
    def __init__(self, r: float) -> None:
        if r <= 0:
            raise InvalidRadius(f"radius must be positive, got {r}")
        self.r = r


REJECTION = InvalidRadius("shared instance")


class AlwaysRejects:
    def __init__(self, r: float) -> None:
        raise REJECTION


class Box:
    def __init__(self, w: float, h: float, d: float) -> None:
        self.w, self.h, self.d = w, h, d


class Polar:
    def __init__(self, x: float, y: float) -> None:
        self.x, self.y = x, y

    @classmethod
    def from_polar(cls, r: float, theta: float) -> "Polar":
        return cls(r * math.cos(theta), r * math.sin(theta))


@dataclass(frozen=True)
class PolarPoint:
    x: float
    y: float

    @classmethod
    def from_polar(cls, r: float, theta: float) -> "PolarPoint":
        return cls(r * math.cos(theta), r * math.sin(theta))


class Labelled:
    def __init__(self, label: str, x: float) -> None:
        self.label, self.x = label, x


class Loose:
    def __init__(self, a, b):
        self.a, self.b = a, b


class Precise:
    def __init__(self, a: np.float32, b: Optional[float]) -> None:
        self.a, self.b = a, b


class Grid:
    def __init__(self, rows: int, cols: int, scale: float) -> None:
        self.rows, self.cols, self.scale = rows, cols, scale


class Mixed:
    def __init__(self, a: float, n: int, c: float) -> None:
        self.a, self.n, self.c = a, n, c


class Shape(abc.ABC):
    def __init__(self, size: float) -> None:
        self.size = size

    @abc.abstractmethod
    def area(self) -> float:
        ...


class TypeErrorInside:
    def __init__(self, x: float) -> None:
        raise TypeError("x must be something else")


class OutOfMemory:
    def __init__(self, x: float) -> None:
        raise MemoryError("no memory left")


class Interrupted:
    def __init__(self, x: float) -> None:
        raise KeyboardInterrupt


class NeedsFlag:
    def __init__(self, x: float, *, flag: bool) -> None:
        self.x, self.flag = x, flag


class OptionalFlag:
    def __init__(self, x: float, *, flag: bool = True) -> None:
        self.x, self.flag = x, flag


class Unit:
    pass


def test_point_example() -> None:
    codec = build(Point, ParameterRangeSet.of((-10, 10), (-10, 10)))

    assert codec.arity == 2
    assert codec.decoder()((3.5, -2.0)) == Point(3.5, -2.0)
    assert codec.decode(np.array([3.5, -2.0])) == Point(3.5, -2.0)


def test_decoded_arguments_are_python_floats() -> None:
    codec = build(Point, [(-10, 10), (-10, 10)])
    p = codec.decode(np.array([1.0, 2.0], dtype=np.float32))
    assert type(p.x) is float
    assert p.x == pytest.approx(1.0)


def test_round_trip_matches_direct_construction() -> None:
    codec = build(Box, [(0, 5), (0, 5), (0, 5)], config=CodecConfig(seed=3))
    factory = codec.encoding()
    for _ in range(20):
        genome = factory()
        direct = Box(*genome)
        decoded = codec.decode(genome)
        assert (decoded.w, decoded.h, decoded.d) == pytest.approx((direct.w, direct.h, direct.d))


def test_domain_error_propagates_unchanged() -> None:
    codec = build(PositiveRadius, [(-5, 5)])

    with pytest.raises(InvalidRadius, match="radius must be positive") as exc_info:
        codec.decode([-1.0])
    assert not isinstance(exc_info.value, InvocationError)
    assert type(exc_info.value) is InvalidRadius
    assert codec.decode([2.0]).r == 2.0


def test_domain_error_keeps_identity() -> None:
    codec = build(AlwaysRejects, [(0, 1)])
    with pytest.raises(InvalidRadius) as exc_info:
        codec.decode([0.5])
    assert exc_info.value is REJECTION


def test_type_error_raised_by_constructor_body_is_domain() -> None:
    codec = build(TypeErrorInside, [(0, 1)])
    with pytest.raises(TypeError, match="something else") as exc_info:
        codec.decode([0.5])
    assert not isinstance(exc_info.value, InvocationError)


def test_fatal_errors_are_not_wrapped() -> None:
    with pytest.raises(MemoryError, match="no memory left"):
        build(OutOfMemory, [(0, 1)]).decode([0.5])
    with pytest.raises(KeyboardInterrupt):
        build(Interrupted, [(0, 1)]).decode([0.5])


def test_abstract_type_fails_as_invocation_error() -> None:
    codec = build(Shape, [(0, 1)])
    with pytest.raises(InvocationError) as exc_info:
        codec.decode([0.5])
    assert isinstance(exc_info.value.__cause__, TypeError)
    assert exc_info.value.type_name == "Shape"
    assert exc_info.value.constructor == "__init__"


def test_wrong_genome_length_is_invocation_error() -> None:
    codec = build(Point, [(0, 1), (0, 1)])
    with pytest.raises(InvocationError, match="longitud 2"):
        codec.decode([0.5])
    with pytest.raises(InvocationError):
        codec.decode([[0.5, 0.5]])
    with pytest.raises(InvocationError):
        codec.decode(["a", "b"])


def test_missing_arity_fails_at_build() -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        build(Box, [(0, 1), (0, 1)])
    assert exc_info.value.type_name == "Box"
    assert exc_info.value.arity == 2
    assert "aridad 2" in str(exc_info.value)


def test_factory_classmethod_is_not_picked_implicitly() -> None:
    codec = build(Polar, [(-10, 10), (-10, 10)])
    assert codec.binding.name == "__init__"
    p = codec.decode([3.0, -4.0])
    assert (p.x, p.y) == (3.0, -4.0)


def test_dataclass_with_factory_builds_on_fields() -> None:
    codec = build(PolarPoint, [(-10, 10), (-10, 10)])
    assert codec.decode([1.5, 2.5]) == PolarPoint(1.5, 2.5)


def test_named_constructor_selects_factory() -> None:
    codec = build(Polar, [(0, 2), (0, 4)], constructor="from_polar")
    p = codec.decode([2.0, math.pi / 2])
    assert p.x == pytest.approx(0.0, abs=1e-12)
    assert p.y == pytest.approx(2.0)
    assert codec.binding.qualname == "Polar.from_polar"

    plain = build(Polar, [(0, 2), (0, 4)], constructor="__init__")
    assert plain.decode([2.0, 1.0]).x == 2.0


def test_unknown_constructor_name() -> None:
    with pytest.raises(ConfigurationError, match="no declara"):
        build(Polar, [(0, 1), (0, 1)], constructor="from_cartesian")


def test_incompatible_parameter_type() -> None:
    with pytest.raises(ConfigurationError):
        build(Labelled, [(0, 1), (0, 1)])


def test_unannotated_parameters_accept_reals() -> None:
    obj = build(Loose, [(0, 1), (0, 1)]).decode([0.25, 0.75])
    assert (obj.a, obj.b) == (0.25, 0.75)


def test_numpy_and_optional_annotations() -> None:
    obj = build(Precise, [(0, 1), (0, 1)]).decode([0.5, 0.25])
    assert isinstance(obj.a, np.float32)
    assert obj.b == 0.25


def test_keyword_only_parameters() -> None:
    with pytest.raises(ConfigurationError):
        build(NeedsFlag, [(0, 1)])
    assert build(OptionalFlag, [(0, 1)]).decode([0.5]).flag is True


def test_not_a_class() -> None:
    with pytest.raises(ConfigurationError):
        build(lambda x: x, [(0, 1)])  # type: ignore[arg-type]


def test_zero_arity() -> None:
    codec = build(Unit, [])
    assert isinstance(codec.decode([]), Unit)
    assert codec.encoding()().shape == (0,)
    assert codec.encoding().sample(3).shape == (3, 0)


def test_integral_positions_are_rounded() -> None:
    codec = build(Grid, [IntRange(-5, 10), IntRange(1, 10), (0.0, 1.0)])
    g = codec.decode([2.5, 3.49, 0.5])
    assert (g.rows, g.cols) == (3, 3)
    assert type(g.rows) is int
    assert codec.decode([-2.5, 1.0, 0.0]).rows == -3


def test_truncating_rounding_policy() -> None:
    codec = build(Grid, [IntRange(-5, 10), IntRange(1, 10), (0.0, 1.0)],
                  config=CodecConfig(int_rounding="trunc"))
    g = codec.decode([2.9, 3.49, 0.5])
    assert (g.rows, g.cols) == (2, 3)
    assert codec.decode([-2.9, 1.0, 0.0]).rows == -2


def test_unknown_rounding_policy() -> None:
    with pytest.raises(ConfigurationError, match="redondeo"):
        build(Grid, [IntRange(0, 1), IntRange(0, 1), (0, 1)],
              config=CodecConfig(int_rounding="ceil"))


def test_integral_range_needs_integral_parameter() -> None:
    with pytest.raises(ConfigurationError):
        build(Point, [IntRange(0, 5), (0, 1)])
    with pytest.raises(ConfigurationError):
        build(Grid, [(0, 5), (0, 5), (0, 1)])


def test_non_finite_allele_at_integral_position_is_coercion_error() -> None:
    codec = build(Grid, [IntRange(0, 5), IntRange(0, 5), (0.0, 1.0)])
    with pytest.raises(CoercionError) as exc_info:
        codec.decode([math.nan, 1.0, 0.5])
    assert exc_info.value.position == 0
    with pytest.raises(CoercionError):
        codec.decode([1.0, math.inf, 0.5])


def test_encoding_respects_ranges() -> None:
    ranges = ParameterRangeSet.of((-1.0, 1.0), IntRange(2, 4), (5.0, 5.0))
    factory = build(Mixed, ranges, config=CodecConfig(seed=11)).encoding()
    for _ in range(200):
        genome = factory()
        assert ranges.contains(genome)
        assert float(genome[1]).is_integer()
    seen = {int(factory()[1]) for _ in range(200)}
    assert seen == {2, 3, 4}


def test_encoding_produces_fresh_genomes() -> None:
    factory = build(Point, [(0, 1), (0, 1)]).encoding()
    a, b = factory(), factory()
    assert a is not b
    a[0] = 42.0
    assert b[0] != 42.0


def test_seeded_encoding_is_reproducible() -> None:
    first = build(Point, [(0, 1), (0, 1)], config=CodecConfig(seed=7)).encoding()
    second = build(Point, [(0, 1), (0, 1)], rng=np.random.default_rng(7)).encoding()
    np.testing.assert_array_equal(first(), second())


def test_sample_stacks_genomes() -> None:
    factory = build(Box, [(0, 1), (1, 2), (2, 3)]).encoding()
    X = factory.sample(5)
    assert X.shape == (5, 3)
    assert factory.sample(0).shape == (0, 3)


def test_concurrent_decodes_match_sequential() -> None:
    codec = build(Box, [(0, 1), (0, 1), (0, 1)], config=CodecConfig(seed=5))
    genomes = [codec.encoding()() for _ in range(500)]

    expected = [(b.w, b.h, b.d) for b in map(codec.decode, genomes)]
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(codec.decoder(), genomes))

    assert [(b.w, b.h, b.d) for b in results] == expected


def test_constructor_codec_of_varargs() -> None:
    codec = ConstructorCodec.of(Point, (-1, 1), (-1, 1))
    assert codec.ranges == ParameterRangeSet.of((-1, 1), (-1, 1))
    assert codec.type is Point
    assert "Point.__init__" in repr(codec)


def test_codec_base_is_abstract() -> None:
    with pytest.raises(TypeError):
        Codec()  # type: ignore[abstract]


def test_generic_codec_of() -> None:
    codec = Codec.of(lambda: [1.0, 2.0], lambda g: sum(g))
    assert codec.decode(codec.encoding()()) == 3.0
    with pytest.raises(ConfigurationError):
        Codec.of(None, lambda g: g)  # type: ignore[arg-type]
