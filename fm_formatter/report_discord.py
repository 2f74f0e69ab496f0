"""
FM Formatter Discord — 채팅용 고정폭 리포트
=============================================
Terse plain text for chat: padded columns inside code fences, ``== H1 ==``
and ``-- H2 --`` headings. Anything not applicable, unset, or at its factory
default is left out, so an untouched form renders as the title line and the
attribution only.
"""

from __future__ import annotations

import logging

from fm_formatter.conversions import ensure_float, to_fixed
from fm_formatter.models import (
    AccelDecelSettings,
    DifferentialTuneSettings,
    FMSetup,
    FrontAndRearSettings,
    FrontAndRearWithUnits,
    PerformanceUpgrades,
    TuneSettings,
    upgrade_pairs,
)
from fm_formatter.report_common import (
    TextAlign,
    separate,
    show_front_rear_values,
    show_value,
    title_line,
)
from fm_formatter.units import GlobalUnit, units_for_global_system
from fm_formatter.values import capital_case, format_float, format_unit, ordinal_suffix

logger = logging.getLogger(__name__)

TABLE_SEPARATOR = ""
FORMATTER_URL = "https://optn.club/formatter/forza/motorsport/v3"
CODE_FENCE = "```"

# ── 게임 기본값 (숨김 대상) ──────────────────────────────────────
DEFAULT_BRAKE_BALANCE = "50"
DEFAULT_BRAKE_PRESSURE = "100"
DEFAULT_DIFF_PERCENT = "50"
DEFAULT_FFB_SCALE = "100"
DEFAULT_STEERING_LOCK = "900"

LABEL_OVERRIDES = {
    "chassis_reinforcement": "Chassis",
    "front_arb": "ARB F",
    "rear_arb": "ARB R",
    "weight_reduction": "Weight",
    "differential": "Diff",
    "front_bumper": "F Bumper",
    "rear_bumper": "R Bumper",
    "rear_wing": "R Wing",
}


# ── 텍스트 요소 ──────────────────────────────────────────────────

def bold(value: str) -> str:
    if not value:
        return value
    return f"** {value.replace('**', '')} **"


def h1(text: str) -> str:
    return f"== {text} ==\n"


def h2(text: str) -> str:
    return f"-- {text} --"


# ── 고정폭 테이블 ────────────────────────────────────────────────

def column_widths(rows: list[list[str]]) -> list[int]:
    """Widest cell per column. The column count comes from the first row."""
    widths = [0] * len(rows[0])
    for row in rows:
        for index, cell in enumerate(row[:len(widths)]):
            widths[index] = max(widths[index], len(cell))
    return widths


def pad_cell(cell: str, width: int | None, align: TextAlign) -> str:
    if cell == "/" or width is None:
        return cell
    if align == TextAlign.CENTER:
        return cell.rjust(width // 2).ljust(width)
    if align == TextAlign.LEFT:
        return cell.ljust(width)
    return cell.rjust(width)


def format_table_row(row: list[str], widths: list[int], align: TextAlign = TextAlign.LEFT) -> str:
    cells = [
        pad_cell(cell, widths[index] if index < len(widths) else None, align)
        for index, cell in enumerate(row)
    ]
    return " ".join(cells).strip()


def format_table(header: str, body: list[list[str]], align: TextAlign = TextAlign.LEFT) -> list[str]:
    if not body:
        return []
    widths = column_widths(body)
    table: list[str] = []
    if header:
        table.append(h2(header))
    table += [format_table_row(row, widths, align) for row in body]
    table.append(TABLE_SEPARATOR)
    return table


def format_front_rear(header: str, values: FrontAndRearSettings, precision: int = 1, suffix: str = "",
                      align: TextAlign = TextAlign.LEFT) -> list[str]:
    if values.na or not show_front_rear_values(values):
        return []
    body = [
        ["F ", format_float(values.front, precision, suffix)],
        ["R ", format_float(values.rear, precision, suffix)],
    ]
    return format_table(header, body, align)


def format_front_rear_with_unit(header: str, value: FrontAndRearWithUnits, precision: int = 1) -> list[str]:
    if value.na:
        return []

    body: list[list[str]] = []
    if show_value(value.front):
        body.append(["F ", *separate(format_unit(value.front, value.units, precision, True), "/")])
    if show_value(value.rear):
        # checks front, as the web formatter does
        number = 0 if value.front == "Stock" else value.rear
        body.append(["R ", *separate(format_unit(number, value.units, precision, True), "/")])

    if not body:
        return []
    return format_table(header, body, TextAlign.RIGHT)


# ── 튠 섹션 ──────────────────────────────────────────────────────

def format_tires(tune: TuneSettings) -> list[str]:
    table = format_front_rear_with_unit("", tune.tires, 1)
    if not table:
        return []
    return [h1("Tires"), *table]


def format_gears(tune: TuneSettings) -> list[str]:
    precision = 2
    ratios = tune.gears.ratios
    if tune.gears.na or not ratios:
        return []

    body = [["FR", to_fixed(ensure_float(ratios[0]), precision)]]
    for index in range(1, len(ratios)):
        if not show_value(ratios[index]):
            break
        body.append([f"{index}{ordinal_suffix(index)}", to_fixed(ensure_float(ratios[index]), precision)])

    if len(body) == 1 and ratios[0] == "":
        return []
    return [h1("Gearing"), *format_table("", body)]


def format_alignment(tune: TuneSettings) -> list[str]:
    alignment = tune.alignment
    if alignment.na:
        return []

    lines: list[str] = []
    if alignment.camber.front or alignment.camber.rear:
        lines += format_front_rear("Camber", alignment.camber, 1, "°", TextAlign.RIGHT)
    if alignment.toe.front or alignment.toe.rear:
        lines += format_front_rear("Toe", alignment.toe, 1, "°", TextAlign.RIGHT)

    add_blank = False
    if show_value(alignment.caster):
        lines.append(f"Caster {alignment.caster}°")
        add_blank = True
    if show_value(alignment.steering_angle):
        lines.append(f"Steering Angle {alignment.steering_angle}°")
        add_blank = True

    if not lines:
        return []
    if add_blank:
        lines.append("")
    return [h1("Alignment"), *lines]


def format_anti_roll_bars(tune: TuneSettings) -> list[str]:
    if tune.arb.na or not show_front_rear_values(tune.arb):
        return []
    return [h1("Anti-roll Bars"), *format_front_rear("", tune.arb)]


def format_springs(tune: TuneSettings) -> list[str]:
    if tune.springs.na:
        return []

    lines: list[str] = []
    if show_front_rear_values(tune.springs):
        lines += format_front_rear_with_unit("Springs", tune.springs, 1)
    if show_front_rear_values(tune.ride_height):
        lines += format_front_rear_with_unit("Ride Height", tune.ride_height, 1)

    if not lines:
        return []
    return [h1("Springs"), *lines]


def format_damping(tune: TuneSettings) -> list[str]:
    if tune.rebound.na and tune.bump.na:
        return []

    lines = [h1("Damping")]
    if show_front_rear_values(tune.bump):
        lines += format_front_rear("Bump", tune.bump)
    if show_front_rear_values(tune.rebound):
        lines += format_front_rear("Rebound", tune.rebound)

    return lines if len(lines) > 1 else []


def format_suspension_geometry(tune: TuneSettings) -> list[str]:
    offset = tune.roll_center_height_offset
    anti = tune.anti_geometry_percent
    if offset.na and anti.na:
        return []

    lines = [h1("Suspension Geometry")]
    if show_front_rear_values(offset):
        lines += format_front_rear_with_unit("Roll Center Offset", offset, 1)
    if show_front_rear_values(anti):
        lines += format_front_rear("Anti-Geometry", anti, 1, "%")

    return lines if len(lines) > 1 else []


def format_aero(tune: TuneSettings) -> list[str]:
    if tune.aero.na:
        return []
    lines = [h1("Aero"), *format_front_rear_with_unit("", tune.aero, 1)]
    return lines if len(lines) > 1 else []


def format_brakes(tune: TuneSettings) -> list[str]:
    brake = tune.brake
    if brake.na:
        return []

    rows: list[list[str]] = []
    if show_value(brake.bias) and brake.bias != DEFAULT_BRAKE_BALANCE:
        rows.append(["Balance", format_float(brake.bias, 0, "%")])
    if show_value(brake.pressure) and brake.pressure != DEFAULT_BRAKE_PRESSURE:
        rows.append(["Pressure", format_float(brake.pressure, 0, "%")])

    if not rows:
        return []
    return [h1("Brakes"), *format_table("", rows)]


def _diff_cell(value: str) -> str:
    if show_value(value) and value != DEFAULT_DIFF_PERCENT:
        return format_float(value, 0, "%")
    return "-"


def format_diff_line(label: str, setting: AccelDecelSettings) -> list[str]:
    """[label, accel, decel], or [] when both sides are hidden."""
    line = [label, _diff_cell(setting.accel), _diff_cell(setting.decel)]
    if line[1] == "-" and line[2] == "-":
        return []
    return line


def format_differential(diff: DifferentialTuneSettings) -> list[str]:
    if diff.na:
        return []

    lines: list[str] = []
    body = [line for line in (format_diff_line("F ", diff.front), format_diff_line("R ", diff.rear)) if line]
    if body:
        lines += format_table("", [["-", "Accel", "Decel"], *body])

    if show_value(diff.center) and diff.center != DEFAULT_DIFF_PERCENT:
        lines += [f"Center {format_float(diff.center, 0, '%')}", ""]

    if not lines:
        return []
    return [h1("Differential"), *lines]


def format_steering_wheel(tune: TuneSettings) -> list[str]:
    wheel = tune.steering_wheel
    if wheel.na:
        return []

    rows: list[list[str]] = []
    if show_value(wheel.ffb_scale) and wheel.ffb_scale != DEFAULT_FFB_SCALE:
        rows.append(["FFB Scale", wheel.ffb_scale])
    if show_value(wheel.steering_lock_range) and wheel.steering_lock_range != DEFAULT_STEERING_LOCK:
        rows.append(["Steering Lock", wheel.steering_lock_range])

    if not rows:
        return []
    return [h1("Steering Wheel"), *format_table("", rows)]


def format_tune(setup: FMSetup) -> list[str]:
    tune = setup.tune
    return [
        *format_tires(tune),
        *format_gears(tune),
        *format_alignment(tune),
        *format_anti_roll_bars(tune),
        *format_springs(tune),
        *format_damping(tune),
        *format_suspension_geometry(tune),
        *format_aero(tune),
        *format_brakes(tune),
        *format_differential(tune.diff),
        *format_steering_wheel(tune),
    ]


# ── 업그레이드 ───────────────────────────────────────────────────

def format_label(key: str) -> str:
    return LABEL_OVERRIDES.get(key) or capital_case(key)


def format_upgrades_section(header: str, pairs: list[tuple[str, str]]) -> list[str]:
    rows = [[format_label(key), value] for key, value in pairs if show_value(value)]
    if not rows:
        return []
    return [h1(header), *format_table("", rows)]


def _front_rear_text(values: FrontAndRearSettings) -> str:
    if not show_front_rear_values(values):
        return ""
    return f"F {values.front or 'Stock'} / R {values.rear or 'Stock'}"


def format_tire_upgrades(upgrades: PerformanceUpgrades) -> list[str]:
    tires = upgrades.tires
    return format_upgrades_section("Tires", [
        ("compound", tires.compound),
        ("width", _front_rear_text(tires.width)),
    ])


def format_wheel_upgrades(upgrades: PerformanceUpgrades) -> list[str]:
    wheels = upgrades.wheels
    return format_upgrades_section("Wheels", [
        ("style", wheels.style),
        ("size", _front_rear_text(wheels.size)),
    ])


def format_upgrades(upgrades: PerformanceUpgrades) -> list[str]:
    return [
        *format_upgrades_section("Conversions", upgrade_pairs(upgrades.conversions)),
        *format_upgrades_section("Fuel and Air", upgrade_pairs(upgrades.fuel_and_air)),
        *format_upgrades_section("Engine", upgrade_pairs(upgrades.engine)),
        *format_upgrades_section("Platform And Handling", upgrade_pairs(upgrades.platform_and_handling)),
        *format_tire_upgrades(upgrades),
        *format_wheel_upgrades(upgrades),
        *format_upgrades_section("Drivetrain", upgrade_pairs(upgrades.drivetrain)),
        *format_upgrades_section("Aero and Appearance", upgrade_pairs(upgrades.aero_and_appearance)),
    ]


# ── 스탯 / 헤더 ──────────────────────────────────────────────────

def _unit_cells(value: str, unit) -> list[str]:
    return separate(format_unit(value, unit, 0, True), "/")


def format_statistics(setup: FMSetup, unit_system: GlobalUnit | str) -> list[str]:
    units = units_for_global_system(unit_system)
    stats = setup.stats
    rows: list[list[str]] = []

    if stats.car_points:
        rows.append(["CP", f"{stats.car_points}", ""])
    if stats.hp:
        rows.append(["Power", *_unit_cells(stats.hp, units.power)])
    if stats.torque:
        rows.append(["Torque", *_unit_cells(stats.torque, units.torque)])
    if stats.weight:
        rows.append(["Weight", *_unit_cells(stats.weight, units.weight)])
    if stats.balance:
        rows.append(["Balance", f"{stats.balance}%"])
    if stats.top_speed:
        rows.append(["Top Speed", *_unit_cells(stats.top_speed, units.speed)])
    if stats.zero_to_sixty:
        rows.append(["0-60", f"{stats.zero_to_sixty}s"])
    if stats.zero_to_hundred:
        rows.append(["0-100", f"{stats.zero_to_hundred}s"])

    if not rows:
        return []
    return format_table("", rows)


def format_header(setup: FMSetup) -> str:
    return f"**{title_line(setup)}**\n"


def generate(setup: FMSetup, unit_system: GlobalUnit | str, share_link: str) -> str:
    """Discord 문서. share_link is accepted for the common signature but not printed."""
    logger.debug("Rendering discord report for %r (%s)", setup.name, unit_system)
    lines = [format_header(setup)]

    blocks = (
        ("Stats", format_statistics(setup, unit_system)),
        ("Upgrades", format_upgrades(setup.upgrades)),
        ("Tune", format_tune(setup)),
    )
    for title, block in blocks:
        if block:
            lines += [bold(title), CODE_FENCE, *block, CODE_FENCE]

    lines += ["Formatted using:", FORMATTER_URL]
    return "\n".join(lines)


class DiscordFormatter:
    """ReportFormatter for discord / chat plain text."""
    name = "discord"

    def generate(self, setup: FMSetup, unit_system: GlobalUnit | str, share_link: str) -> str:
        return generate(setup, unit_system, share_link)
