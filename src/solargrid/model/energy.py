"""
Energy Estimate
===============
Rough daily energy yield of the array: panel count times a fixed panel spec.
No irradiance model; the result depends on rows * cols only.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from solargrid import config
from solargrid.model.errors import InvalidParameter
from solargrid.model.layout import LayoutParams


@dataclass(frozen=True)
class PanelSpec:
    wattage: float = config.PANEL_WATTAGE
    efficiency: float = config.PANEL_EFFICIENCY
    sunlight_hours: float = config.SUNLIGHT_HOURS


@dataclass(frozen=True)
class EnergyEstimate:
    total_panels: int
    total_power_kwh_per_day: float

    def format(self) -> str:
        """Readout text, rounded to two decimals."""
        return f"{self.total_power_kwh_per_day:.2f} kWh/day"


def estimate(panel_count: float, wattage: float, efficiency: float, sunlight_hours: float) -> float:
    """
    Daily energy for ``panel_count`` identical panels.

    The product is returned as-is; rounding is left to the display.
    """
    for name, value in (
        ("panel_count", panel_count),
        ("wattage", wattage),
        ("efficiency", efficiency),
        ("sunlight_hours", sunlight_hours),
    ):
        if not math.isfinite(value) or value < 0:
            raise InvalidParameter(f"{name} must be a finite non-negative number, got {value!r}")
    return panel_count * wattage * efficiency * sunlight_hours


def estimate_for_layout(params: LayoutParams, spec: PanelSpec | None = None) -> EnergyEstimate:
    spec = spec or PanelSpec()
    total_panels = params.rows * params.cols
    power = estimate(total_panels, spec.wattage, spec.efficiency, spec.sunlight_hours)
    return EnergyEstimate(total_panels=total_panels, total_power_kwh_per_day=power)
