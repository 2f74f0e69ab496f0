"""
FM Formatter Reddit — 마크다운 리포트
======================================
Verbose forum markdown: pipe tables with bold headers and an alignment row,
every tune section present (``Not Applicable`` rows where the form says so).

Output is character-exact with what the web formatter pastes, including a
few of its quirks (springs follow the anti-roll bar flag, aspiration gates
the body kit row, the wheel style is printed twice).
"""

from __future__ import annotations

import logging

from fm_formatter.conversions import ensure_float, to_fixed
from fm_formatter.models import (
    DifferentialTuneSettings,
    FMSetup,
    FrontAndRearSettings,
    FrontAndRearWithUnits,
    PerformanceUpgrades,
    TuneSettings,
    upgrade_pairs,
)
from fm_formatter.report_common import TextAlign, show_value, title_line
from fm_formatter.units import GlobalUnit, units_for_global_system
from fm_formatter.values import (
    capital_case,
    format_float,
    format_unit,
    format_unit_headers,
    ordinal_suffix,
)

logger = logging.getLogger(__name__)

TABLE_SEPARATOR = "\n######\n"
FORMATTER_URL = "https://optn.club/formatter/forza/motorsport/v2"
ISSUES_URL = "https://github.com/OPTN-Club/optn.club/issues"


# ── 마크다운 테이블 ──────────────────────────────────────────────

def bold(value: str) -> str:
    if not value:
        return value
    return f"**{value.replace('**', '')}**"


def format_table_row(row: list[str], bold_first_col: bool = False) -> str:
    cells = list(row)
    if bold_first_col and cells:
        cells[0] = bold(cells[0])
    return f"|{'|'.join(cells)}|"


def format_table(header: list[str], body: list[list[str]], bold_first_col: bool = False,
                 align: TextAlign = TextAlign.RIGHT) -> list[str]:
    # 첫 열은 항상 왼쪽 정렬
    separator_row = [TextAlign.LEFT.value, align.value]
    separator_row += [align.value] * max(0, len(header) - 2)
    return [
        format_table_row([bold(cell) for cell in header]),
        format_table_row(separator_row),
        *(format_table_row(row, bold_first_col) for row in body),
        TABLE_SEPARATOR,
    ]


def format_front_rear(headers: list[str], values: list[FrontAndRearSettings],
                      precision: int = 1, suffix: str = "") -> list[str]:
    if all(v.na for v in values):
        return format_table(headers, [["Not Applicable", *([""] * len(values))]])

    body = [
        ["Front", *(format_float(v.front, precision, suffix) for v in values)],
        ["Rear", *(format_float(v.rear, precision, suffix) for v in values)],
    ]
    return format_table(headers, body)


def format_front_rear_with_unit(header: str, value: FrontAndRearWithUnits, precision: int = 1) -> list[str]:
    headers = [header, *format_unit_headers(value.units)]

    if value.na:
        return format_table(headers, [["Not Applicable", *format_unit("", value.units, precision)]])

    body = [
        ["Front", *format_unit(value.front, value.units, precision)],
        ["Rear", *format_unit(value.rear, value.units, precision)],
    ]
    return format_table(headers, body)


# ── 튠 섹션 ──────────────────────────────────────────────────────

def format_tires(tune: TuneSettings) -> list[str]:
    return format_front_rear_with_unit("Tires", tune.tires, 1)


def format_gears(tune: TuneSettings) -> list[str]:
    """Final drive, then gears until the first empty/zero slot."""
    precision = 2
    headers = ["Gears", "Ratio"]
    ratios = tune.gears.ratios

    if tune.gears.na:
        return format_table(headers, [["Not Applicable", ""]])
    if not ratios:
        return []

    body = [["Final Drive", to_fixed(ensure_float(ratios[0]), precision)]]
    for index in range(1, len(ratios)):
        ratio = ensure_float(ratios[index])
        if not ratio:
            break
        body.append([f"{index}{ordinal_suffix(index)}", to_fixed(ratio, precision)])

    if len(body) == 1 and ratios[0] == "":
        return []

    return format_table(headers, body)


def format_alignment(tune: TuneSettings) -> list[str]:
    alignment = tune.alignment
    return format_front_rear(
        ["Alignment", "Camber", "Toe", "Caster", "Steering Angle"],
        [
            alignment.camber,
            alignment.toe,
            FrontAndRearSettings(front=alignment.caster, rear=""),
            FrontAndRearSettings(front=alignment.steering_angle, rear=""),
        ],
        1,
        "°",
    )


def format_anti_roll_bars(tune: TuneSettings) -> list[str]:
    headers = ["Anti-roll Bars", ""]
    if tune.arb.na:
        return format_table(headers, [["Not Applicable", ""]])
    return format_front_rear(headers, [tune.arb])


def format_springs(tune: TuneSettings) -> list[str]:
    # The web formatter keys this section off the ARB flag.
    if tune.arb.na:
        return format_table(["ARBs", ""], [["Not Applicable", ""]])
    return [
        *format_front_rear_with_unit("Springs", tune.springs, 1),
        *format_front_rear_with_unit("Ride Height", tune.ride_height, 1),
    ]


def format_damping(tune: TuneSettings) -> list[str]:
    return format_front_rear(["Damping", "Bump", "Rebound"], [tune.bump, tune.rebound])


def _roll_center_cells(value: FrontAndRearWithUnits) -> tuple[str, str]:
    front = " / ".join(format_unit(value.front, value.units, 1, True))
    rear = " / ".join(format_unit(value.rear, value.units, 1, True))
    return front, rear


def format_suspension_geometry(tune: TuneSettings) -> list[str]:
    front, rear = _roll_center_cells(tune.roll_center_height_offset)
    anti = tune.anti_geometry_percent
    return format_table(
        ["Suspension Geometry", "Roll Center Offset", "Anti-Geometry"],
        [
            ["Front", front, f"{anti.front}%"],
            ["Rear", rear, f"{anti.rear}%"],
        ],
        bold_first_col=True,
    )


def format_aero(tune: TuneSettings) -> list[str]:
    aero = tune.aero
    headers = ["Aero", *format_unit_headers(aero.units)]

    if aero.na:
        return format_table(headers, [["Not Applicable", *format_unit("", aero.units)]])

    front = ["Front"]
    rear = ["Rear"]
    if aero.front == "":
        front += ["N/A", "", ""]
    else:
        front += format_unit(aero.front, aero.units, 1)
    if aero.rear == "":
        rear += ["N/A", "", ""]
    else:
        rear += format_unit(aero.rear, aero.units, 1)
    return format_table(headers, [front, rear])


def format_brakes(tune: TuneSettings) -> list[str]:
    headers = ["Brakes", "%"]
    brake = tune.brake

    if not brake.bias and not brake.pressure:
        return format_table(headers, [["Not Applicable", ""]])

    return format_table(headers, [
        ["Balance", format_float(brake.bias, 0, "%")],
        ["Pressure", format_float(brake.pressure, 0, "%")],
    ])


def format_differential(diff: DifferentialTuneSettings) -> list[str]:
    header = ["Differential", "Accel", "Decel"]

    if diff.na:
        return format_table(header, [["Not Applicable", "", ""]])

    body: list[list[str]] = []
    for label, setting in (("Front", diff.front), ("Rear", diff.rear)):
        if show_value(setting.accel) or show_value(setting.decel):
            body.append([label, format_float(setting.accel, 0, "%"), format_float(setting.decel, 0, "%")])

    if show_value(diff.center):
        body.append(["Center", format_float(diff.center, 0, "%"), ""])

    return format_table(header, body)


def format_steering_wheel(tune: TuneSettings) -> list[str]:
    headers = ["Steering Wheel", ""]
    wheel = tune.steering_wheel

    if wheel.na:
        return format_table(headers, [["Not Applicable", ""]])

    return format_table(headers, [
        ["FFB Scale", wheel.ffb_scale],
        ["Steering Lock Range", wheel.steering_lock_range],
    ])


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

def format_conversions(upgrades: PerformanceUpgrades) -> list[str]:
    conversions = upgrades.conversions
    body = [
        ["Engine", conversions.engine or "Stock"],
        ["Drivetrain", conversions.drivetrain or "Stock"],
    ]
    if conversions.aspiration:
        body.append(["Aspiration", conversions.aspiration])
        # body kit row rides on aspiration, same as the web formatter
        body.append(["Body Kit", conversions.body_kit or "Stock"])
    return format_table(["Conversions", ""], body, align=TextAlign.LEFT)


def format_tire_upgrades(upgrades: PerformanceUpgrades) -> list[str]:
    tires = upgrades.tires
    return format_table(
        ["Tires", ""],
        [
            ["Compound", tires.compound],
            ["Tire Width", f"Front {tires.width.front} mm, Rear {tires.width.rear} mm"],
        ],
        align=TextAlign.LEFT,
    )


def format_wheel_upgrades(upgrades: PerformanceUpgrades) -> list[str]:
    wheels = upgrades.wheels
    return format_table(
        ["Wheels", ""],
        [
            ["Style", f"{wheels.style} {wheels.style}"],
            ["Size", f"Front {wheels.size.front} in, Rear {wheels.size.rear} in"],
        ],
        align=TextAlign.LEFT,
    )


def format_aero_build(upgrades: PerformanceUpgrades) -> list[str]:
    rows = [[capital_case(key), value]
            for key, value in upgrade_pairs(upgrades.aero_and_appearance) if value]
    if not rows:
        return []
    return format_table(["Aero and Appearance", ""], rows, align=TextAlign.LEFT)


def format_upgrades_section(group) -> list[list[str]]:
    """Blank and N/A values are dropped. Stock stays visible here."""
    return [[capital_case(key), value]
            for key, value in upgrade_pairs(group)
            if value and str(value) != "N/A"]


def format_upgrades(upgrades: PerformanceUpgrades) -> list[str]:
    left = TextAlign.LEFT
    return [
        *format_conversions(upgrades),
        *format_table(["Fuel and Air", ""], format_upgrades_section(upgrades.fuel_and_air), align=left),
        *format_table(["Engine", ""], format_upgrades_section(upgrades.engine), align=left),
        *format_table(["Platform And Handling", ""],
                      format_upgrades_section(upgrades.platform_and_handling), align=left),
        *format_tire_upgrades(upgrades),
        *format_wheel_upgrades(upgrades),
        *format_table(["Drivetrain", ""], format_upgrades_section(upgrades.drivetrain), align=left),
        *format_aero_build(upgrades),
    ]


# ── 스탯 / 헤더 ──────────────────────────────────────────────────

def format_statistics(setup: FMSetup, unit_system: GlobalUnit | str) -> list[str]:
    units = units_for_global_system(unit_system)
    stats = setup.stats
    rows: list[list[str]] = []

    if stats.car_points:
        rows.append(["CP", f"{stats.car_points}", ""])
    if stats.weight:
        rows.append(["Weight", *format_unit(stats.weight, units.weight, 0, True)])
    if stats.balance:
        rows.append(["Balance", f"{stats.balance}%"])
    if stats.hp:
        rows.append(["Power", *format_unit(stats.hp, units.power, 0, True)])
    if stats.torque:
        rows.append(["Torque", *format_unit(stats.torque, units.torque, 0, True)])
    if stats.top_speed:
        rows.append(["Top Speed", *format_unit(stats.top_speed, units.speed, 0, True)])
    if stats.zero_to_sixty:
        rows.append(["0-60", f"{stats.zero_to_sixty}s", ""])
    if stats.zero_to_hundred:
        rows.append(["0-100", f"{stats.zero_to_hundred}s", ""])

    if not rows:
        return []
    return format_table(["Stats", "", ""], rows, bold_first_col=True, align=TextAlign.LEFT)


def format_header(setup: FMSetup) -> str:
    return f"# {title_line(setup)}\n"


def generate(setup: FMSetup, unit_system: GlobalUnit | str, share_link: str) -> str:
    logger.debug("Rendering reddit report for %r (%s)", setup.name, unit_system)
    return "\n".join([
        format_header(setup),
        *format_statistics(setup, unit_system),
        f"[View this tune on optn.club]({share_link})\n",
        "---\n",
        "## Performance\n",
        *format_upgrades(setup.upgrades),
        "---\n",
        "## Tune\n",
        *format_tune(setup),
        "---\n",
        f"Formatted text generated by the [OPTN.club FM Setup Formatter]({FORMATTER_URL})  \n",
        f"Submit bugs, feature requests, and questions on [Github]({ISSUES_URL})",
    ])


class RedditFormatter:
    """ReportFormatter for reddit / forum markdown."""
    name = "reddit"

    def generate(self, setup: FMSetup, unit_system: GlobalUnit | str, share_link: str) -> str:
        return generate(setup, unit_system, share_link)
