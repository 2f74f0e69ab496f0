"""
FM Formatter Report Common — 리포트 공용 헬퍼
===============================================
Sentinel handling, table alignment markers and the small list helpers both
renderers share.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Protocol

from fm_formatter.models import FMSetup, FrontAndRearSettings
from fm_formatter.units import GlobalUnit

# "not selected" 값. Stock/None/N/A are form placeholders, not user input.
FALSEY_VALUES = (None, "", "N/A", "Stock", "None")


class TextAlign(StrEnum):
    LEFT = ":--"
    RIGHT = "--:"
    CENTER = ":-:"


class ReportFormatter(Protocol):
    name: str

    def generate(self, setup: FMSetup, unit_system: GlobalUnit | str, share_link: str) -> str:
        ...


def show_value(value) -> bool:
    return value not in FALSEY_VALUES


def show_front_rear_values(values: FrontAndRearSettings) -> bool:
    return show_value(values.front) or show_value(values.rear)


def separate(values: list[str], separator: str) -> list[str]:
    """["a", "b"] → ["a", sep, "b"]."""
    separated: list[str] = []
    for index, value in enumerate(values):
        separated.append(value)
        if index < len(values) - 1:
            separated.append(separator)
    return separated


def title_line(setup: FMSetup) -> str:
    """"2024 Test Car - A 700". Missing name parts are skipped."""
    return f"{setup.name} - {setup.stats.classification} {setup.stats.pi}"
