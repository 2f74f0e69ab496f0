"""
FM Formatter Values — 셀 단위 값 포맷터
========================================
Turns a single value (plus its unit) into the display strings the report
tables put in their cells.
"""

from __future__ import annotations

import re

from fm_formatter.conversions import convert_to_opposite, ensure_float, to_fixed
from fm_formatter.units import opposite, parse_unit

_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|[_\-\s]+")


def is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def format_float(value, precision: int = 2, suffix: str = "") -> str:
    """빈 값은 빈 셀, 나머지는 고정 소수점 + suffix."""
    if is_blank(value):
        return ""
    return f"{to_fixed(ensure_float(value), precision)}{suffix}"


def format_unit(value, unit, precision: int = 2, show_unit: bool = False) -> list[str]:
    """[원래 단위 값, 짝 단위 값]. Blank input gives ["", ""]."""
    unit = parse_unit(unit)
    if is_blank(value):
        return ["", ""]

    primary = to_fixed(ensure_float(value), precision)
    secondary = convert_to_opposite(value, unit, precision)
    if show_unit:
        return [f"{primary} {unit.value}", f"{secondary} {opposite(unit).value}"]
    return [primary, secondary]


def format_unit_headers(unit) -> list[str]:
    unit = parse_unit(unit)
    return [unit.value, opposite(unit).value]


def ordinal_suffix(number: int) -> str:
    if 11 <= number % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def capital_case(key: str) -> str:
    """"oilAndCooling" / "oil_and_cooling" → "Oil And Cooling"."""
    words = [w for w in _WORD_BOUNDARY.split(key) if w]
    return " ".join(w[0].upper() + w[1:].lower() for w in words)
