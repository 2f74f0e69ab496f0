"""
FM Formatter Units — 단위 enum + 글로벌 단위계 레지스트리
========================================================
Every measured quantity has exactly two user-facing units. The enum value
doubles as the display label, so registry lookups and report headers share
one source of truth.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class UnknownUnitError(ValueError):
    """Raised when a unit (or unit system) is not in the registry."""


# ── 단위 enum ────────────────────────────────────────────────────

class GlobalUnit(StrEnum):
    METRIC = "Metric"
    IMPERIAL = "Imperial"


class PressureUnit(StrEnum):
    BAR = "bar"
    PSI = "psi"


class SpringRateUnit(StrEnum):
    KGF = "kgf/mm"
    LBS = "lb/in"


class LengthUnit(StrEnum):
    CM = "cm"
    IN = "in"


class ForceUnit(StrEnum):
    KGF = "kgf"
    LBF = "lbf"


class SpeedUnit(StrEnum):
    KPH = "kph"
    MPH = "mph"


class WeightUnit(StrEnum):
    KG = "kg"
    LB = "lb"


class PowerUnit(StrEnum):
    KW = "kW"
    HP = "hp"


class TorqueUnit(StrEnum):
    NM = "Nm"
    LBFT = "lb-ft"


UNIT_TYPES = (
    PressureUnit, SpringRateUnit, LengthUnit, ForceUnit,
    SpeedUnit, WeightUnit, PowerUnit, TorqueUnit,
)


# ── 페어링 테이블 ─────────────────────────────────────────────────

_OPPOSITES: dict[StrEnum, StrEnum] = {
    PressureUnit.BAR: PressureUnit.PSI,
    PressureUnit.PSI: PressureUnit.BAR,
    SpringRateUnit.KGF: SpringRateUnit.LBS,
    SpringRateUnit.LBS: SpringRateUnit.KGF,
    LengthUnit.CM: LengthUnit.IN,
    LengthUnit.IN: LengthUnit.CM,
    ForceUnit.KGF: ForceUnit.LBF,
    ForceUnit.LBF: ForceUnit.KGF,
    SpeedUnit.KPH: SpeedUnit.MPH,
    SpeedUnit.MPH: SpeedUnit.KPH,
    WeightUnit.KG: WeightUnit.LB,
    WeightUnit.LB: WeightUnit.KG,
    PowerUnit.KW: PowerUnit.HP,
    PowerUnit.HP: PowerUnit.KW,
    TorqueUnit.NM: TorqueUnit.LBFT,
    TorqueUnit.LBFT: TorqueUnit.NM,
}

_UNITS_BY_LABEL: dict[str, StrEnum] = {
    member.value.casefold(): member
    for unit_type in UNIT_TYPES
    for member in unit_type
}


def opposite(unit: StrEnum) -> StrEnum:
    """Paired unit of the same quantity (bar → psi, psi → bar, ...)."""
    try:
        return _OPPOSITES[unit]
    except KeyError:
        raise UnknownUnitError(f"No paired unit registered for {unit!r}") from None


def parse_unit(text: str | StrEnum) -> StrEnum:
    """Label string ("bar", "kgf/mm", "lb-ft") → unit enum member."""
    if isinstance(text, UNIT_TYPES):
        return text
    unit = _UNITS_BY_LABEL.get(str(text).strip().casefold())
    if unit is None:
        raise UnknownUnitError(f"Unknown unit: {text!r}")
    return unit


def parse_global_unit(text: str | GlobalUnit) -> GlobalUnit:
    if isinstance(text, GlobalUnit):
        return text
    for member in GlobalUnit:
        if member.value.casefold() == str(text).strip().casefold():
            return member
    raise UnknownUnitError(f"Unknown unit system: {text!r} (expected Metric or Imperial)")


# ── 글로벌 단위계 ─────────────────────────────────────────────────

@dataclass(frozen=True)
class GlobalUnits:
    """Concrete units used for the statistics block."""
    weight: WeightUnit
    power: PowerUnit
    torque: TorqueUnit
    speed: SpeedUnit


_GLOBAL_UNITS: dict[GlobalUnit, GlobalUnits] = {
    GlobalUnit.METRIC: GlobalUnits(
        weight=WeightUnit.KG,
        power=PowerUnit.KW,
        torque=TorqueUnit.NM,
        speed=SpeedUnit.KPH,
    ),
    GlobalUnit.IMPERIAL: GlobalUnits(
        weight=WeightUnit.LB,
        power=PowerUnit.HP,
        torque=TorqueUnit.LBFT,
        speed=SpeedUnit.MPH,
    ),
}


def units_for_global_system(system: GlobalUnit | str) -> GlobalUnits:
    return _GLOBAL_UNITS[parse_global_unit(system)]
