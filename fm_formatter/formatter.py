"""
FM Formatter — 출력 대상 레지스트리
=====================================
Picks the report strategy for an output target and runs it.

    from fm_formatter.formatter import generate_report
    text = generate_report(setup, "discord", "Imperial", link)
"""

from __future__ import annotations

import logging

from fm_formatter.models import FMSetup
from fm_formatter.report_common import ReportFormatter
from fm_formatter.report_discord import DiscordFormatter
from fm_formatter.report_reddit import RedditFormatter
from fm_formatter.units import GlobalUnit, parse_global_unit

logger = logging.getLogger(__name__)


class UnknownFormatterError(ValueError):
    """Raised for an output target with no registered formatter."""


FORMATTERS: dict[str, ReportFormatter] = {
    RedditFormatter.name: RedditFormatter(),
    DiscordFormatter.name: DiscordFormatter(),
}


def available_targets() -> list[str]:
    return sorted(FORMATTERS)


def get_formatter(target: str) -> ReportFormatter:
    key = str(target).strip().lower()
    formatter = FORMATTERS.get(key)
    if formatter is None:
        raise UnknownFormatterError(
            f"Unknown output target: {target!r} (expected one of {', '.join(available_targets())})"
        )
    logger.debug("Using %s formatter", key)
    return formatter


def generate_report(setup: FMSetup, target: str, unit_system: GlobalUnit | str, share_link: str) -> str:
    """대상 + 단위계 검증 후 리포트 문자열 생성."""
    formatter = get_formatter(target)
    return formatter.generate(setup, parse_global_unit(unit_system), share_link)
