"""
Configuracion base del codec y utilidades de seeding reproducible.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

import numpy as np

ROUNDING_POLICIES = ("nearest", "trunc")


@dataclass(frozen=True)
class CodecConfig:
    """
    Parametros compartidos por la construccion de codecs.

    ``int_rounding`` define como se convierte un alelo real a entero en las
    posiciones ligadas a un ``IntRange``: ``"nearest"`` redondea al entero
    mas cercano (mitades lejos de cero) y ``"trunc"`` trunca hacia cero.
    """

    # Muestreo de genomas
    seed: Optional[int] = None

    # Decodificacion
    int_rounding: str = "nearest"

    def make_rng(self) -> np.random.Generator:
        return np.random.default_rng(self.seed)


def set_global_seeds(seed: int) -> None:
    """Inicializa generadores pseudoaleatorios reproducibles."""
    random.seed(seed)
    np.random.seed(seed)


if __name__ == "__main__":
    cfg = CodecConfig(seed=42)
    set_global_seeds(42)
    print("Config de prueba:", cfg, cfg.make_rng().random())
