"""
FM Formatter Conversions — 단위 변환 엔진
==========================================
Pressure, length, force, speed, weight, power, torque and spring rate
conversions between the two units of each quantity.

Every function is a pure function of (value, source unit) and the fixed
multiplier table. Input may be a number or a numeric string; anything that
does not parse is treated as 0.0.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, localcontext

from fm_formatter.units import (
    ForceUnit,
    LengthUnit,
    PowerUnit,
    PressureUnit,
    SpeedUnit,
    SpringRateUnit,
    TorqueUnit,
    WeightUnit,
    opposite,
    parse_unit,
)

logger = logging.getLogger(__name__)


# ── 변환 상수 ────────────────────────────────────────────────────

@dataclass(frozen=True)
class SpringMultipliers:
    newtons_kgf: float = 0.1019716212978    # N/mm → kgf/mm
    newtons_lbs: float = 0.57101471743224   # N/mm → lb/in


@dataclass(frozen=True)
class Multipliers:
    springs: SpringMultipliers = field(default_factory=SpringMultipliers)
    force: float = 0.45359236844386          # lbf → kgf
    pressure: float = 0.0689475728           # psi → bar
    length: float = 0.39370078740214         # cm → in
    weight_newtons_to_mass: float = 9.80665  # g
    speed: float = 0.621371                  # kph → mph
    power: float = 0.745699872               # hp → kW
    torque: float = 1.3558179483             # lb-ft → Nm


MULTIPLIERS = Multipliers()


# ── 입력 정규화 ──────────────────────────────────────────────────

def ensure_float(value: str | float | int | None, default: float = 0.0) -> float:
    """숫자/숫자 문자열 → float. 빈 값, 파싱 실패, NaN/inf는 default."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return default
        try:
            number = float(text)
        except ValueError:
            logger.debug("Could not parse %r as a number, using %s", value, default)
            return default
    if not math.isfinite(number):
        logger.debug("Non-finite value %r replaced with %s", value, default)
        return default
    return number


# ── 압력 / 길이 / 힘 / 속도 ───────────────────────────────────────

def convert_pressure(value: str | float, from_unit: PressureUnit) -> float:
    v = ensure_float(value)
    if from_unit == PressureUnit.BAR:
        return v / MULTIPLIERS.pressure
    return v * MULTIPLIERS.pressure


def convert_pressure_from(value: str | float, from_unit: PressureUnit) -> dict[str, float]:
    v = ensure_float(value)
    c = convert_pressure(v, from_unit)
    if from_unit == PressureUnit.BAR:
        return {"bar": v, "psi": c}
    return {"bar": c, "psi": v}


def convert_length(value: str | float, from_unit: LengthUnit) -> float:
    v = ensure_float(value)
    if from_unit == LengthUnit.CM:
        return v * MULTIPLIERS.length
    return v / MULTIPLIERS.length


def convert_length_from(value: str | float, from_unit: LengthUnit) -> dict[str, float]:
    v = ensure_float(value)
    c = convert_length(v, from_unit)
    if from_unit == LengthUnit.IN:
        return {"cm": c, "in": v}
    return {"cm": v, "in": c}


def convert_force(value: str | float, from_unit: ForceUnit) -> float:
    v = ensure_float(value)
    if from_unit == ForceUnit.KGF:
        return v / MULTIPLIERS.force
    return v * MULTIPLIERS.force


def convert_force_from(value: str | float, from_unit: ForceUnit) -> dict[str, float]:
    v = ensure_float(value)
    c = convert_force(v, from_unit)
    if from_unit == ForceUnit.KGF:
        return {"kgf": v, "lbf": c}
    return {"kgf": c, "lbf": v}


def convert_speed(value: str | float, from_unit: SpeedUnit) -> float:
    v = ensure_float(value)
    if from_unit == SpeedUnit.MPH:
        return v / MULTIPLIERS.speed
    return v * MULTIPLIERS.speed


def convert_speed_from(value: str | float, from_unit: SpeedUnit) -> dict[str, float]:
    v = ensure_float(value)
    c = convert_speed(v, from_unit)
    if from_unit == SpeedUnit.KPH:
        return {"kph": v, "mph": c}
    return {"kph": c, "mph": v}


# ── 중량 / 출력 / 토크 (스탯 블록용) ─────────────────────────────

def convert_weight(value: str | float, from_unit: WeightUnit) -> float:
    """kg ↔ lb. Same ratio as kgf ↔ lbf."""
    v = ensure_float(value)
    if from_unit == WeightUnit.KG:
        return v / MULTIPLIERS.force
    return v * MULTIPLIERS.force


def convert_power(value: str | float, from_unit: PowerUnit) -> float:
    v = ensure_float(value)
    if from_unit == PowerUnit.KW:
        return v / MULTIPLIERS.power
    return v * MULTIPLIERS.power


def convert_torque(value: str | float, from_unit: TorqueUnit) -> float:
    v = ensure_float(value)
    if from_unit == TorqueUnit.NM:
        return v / MULTIPLIERS.torque
    return v * MULTIPLIERS.torque


def convert_weight_to_mass(value: str | float, from_unit: WeightUnit) -> float:
    """중량 → 질량. Goes through the spring rate newtons constants first."""
    v = ensure_float(value)
    if from_unit == WeightUnit.KG:
        newtons = v / MULTIPLIERS.springs.newtons_kgf
    else:
        newtons = v / MULTIPLIERS.springs.newtons_lbs
    return newtons / MULTIPLIERS.weight_newtons_to_mass


# ── 스프링 레이트 (N/mm 경유 2단계 변환) ──────────────────────────

def spring_rate_to_newtons(value: str | float, from_unit: SpringRateUnit | str) -> float:
    v = ensure_float(value)
    if from_unit == SpringRateUnit.KGF:
        return v / MULTIPLIERS.springs.newtons_kgf
    if from_unit == SpringRateUnit.LBS:
        return v / MULTIPLIERS.springs.newtons_lbs
    return v


def spring_rate_from_newtons(newtons: float, to_unit: SpringRateUnit | str) -> float:
    if to_unit == SpringRateUnit.KGF:
        return newtons * MULTIPLIERS.springs.newtons_kgf
    if to_unit == SpringRateUnit.LBS:
        return newtons * MULTIPLIERS.springs.newtons_lbs
    return newtons


def convert_spring_rate(value: str | float, from_unit: SpringRateUnit | str,
                        to_unit: SpringRateUnit | str) -> float:
    newtons = spring_rate_to_newtons(value, from_unit)
    return spring_rate_from_newtons(newtons, to_unit)


def convert_spring_rate_from(value: str | float, from_unit: SpringRateUnit | str) -> dict[str, float]:
    newtons = spring_rate_to_newtons(value, from_unit)
    return {
        "newtons": newtons,
        "kgf": spring_rate_from_newtons(newtons, SpringRateUnit.KGF),
        "lbs": spring_rate_from_newtons(newtons, SpringRateUnit.LBS),
    }


# ── 범용 디스패치 ────────────────────────────────────────────────

_CONVERTERS = {
    PressureUnit: convert_pressure,
    LengthUnit: convert_length,
    ForceUnit: convert_force,
    SpeedUnit: convert_speed,
    WeightUnit: convert_weight,
    PowerUnit: convert_power,
    TorqueUnit: convert_torque,
}


def convert(value: str | float, from_unit) -> float:
    """from_unit → 짝 단위로 변환한 숫자."""
    unit = parse_unit(from_unit)
    target = opposite(unit)
    if isinstance(unit, SpringRateUnit):
        return convert_spring_rate(value, unit, target)
    return _CONVERTERS[type(unit)](value, unit)


# ── 고정 소수점 출력 ─────────────────────────────────────────────

def to_fixed(value: float, precision: int = 0) -> str:
    """고정 소수점 문자열. Half-up on the exact binary value, no exponent.

    1.005 is stored as 1.00499999..., so to_fixed(1.005, 2) == "1.00",
    while exact ties such as 0.125 or 2.5 round up ("0.13", "3").
    """
    number = ensure_float(value)
    if number == 0:
        number = 0.0  # -0.0 prints as "0"
    with localcontext() as ctx:
        ctx.prec = 400
        rounded = Decimal(number).quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)
    return format(rounded, "f")


def convert_to_opposite(value: str | float, from_unit, precision: int = 0) -> str:
    """convert() + to_fixed(). The display entry point used by the formatters."""
    return to_fixed(convert(value, from_unit), precision)
