from __future__ import annotations
from dataclasses import dataclass

@dataclass(frozen=True)
class ParseSettings:
    """Umbrales del parser geométrico (en píxeles salvo los factores)."""
    fallback_tolerance: int = 20
    min_tolerance: int = 10
    tolerance_factor: float = 0.6
    # desplazamiento permitido del número de día respecto al nombre del día
    day_number_min_dx: float = -5
    day_number_max_dx: float = 200
    header_band_min: float = 30
    header_band_factor: float = 2.0
    # ventana de búsqueda de la hora respecto al alias
    time_min_dx: float = -60
    time_max_dx: float = 400

DEFAULT_SETTINGS = ParseSettings()
