"""
FM Formatter Models — FMSetup 데이터클래스 + 기본 폼 + 로더
=============================================================
The tuning record the formatters consume, its v2 default form, and a loader
for the form-state JSON shape (camelCase keys).

Records are frozen pydantic dataclasses. Loading goes through one
TypeAdapter, so shape errors surface as ``pydantic.ValidationError``.

Field order inside every upgrade group follows the default form. The
upgrade tables are rendered in that order.
"""

from __future__ import annotations

from dataclasses import field, fields
from enum import StrEnum
from typing import Annotated

from pydantic import BeforeValidator, ConfigDict, TypeAdapter, model_validator
from pydantic.alias_generators import to_camel
from pydantic.dataclasses import dataclass

from fm_formatter.conversions import ensure_float
from fm_formatter.units import (
    ForceUnit,
    LengthUnit,
    PowerUnit,
    PressureUnit,
    SpeedUnit,
    SpringRateUnit,
    TorqueUnit,
    WeightUnit,
    parse_unit,
)

# 폼 JSON은 camelCase, 파이썬 필드는 snake_case (둘 다 허용)
RECORD_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)

# ── PI 클래스 ────────────────────────────────────────────────────
# X 999 / P 901-998 / R 801-900 / S 701-800 / A 601-700
# B 501-600 / C 401-500 / D 301-400 / E 0-300


class FMPIClass(StrEnum):
    E = "E"
    D = "D"
    C = "C"
    B = "B"
    A = "A"
    S = "S"
    R = "R"
    P = "P"
    X = "X"


FM_PI_CLASS_MAP: dict[FMPIClass, int] = {
    FMPIClass.E: 300,
    FMPIClass.D: 400,
    FMPIClass.C: 500,
    FMPIClass.B: 600,
    FMPIClass.A: 700,
    FMPIClass.S: 800,
    FMPIClass.R: 900,
    FMPIClass.P: 998,
    FMPIClass.X: 999,
}


def classify_pi(pi: int) -> FMPIClass:
    """PI → 클래스. Anything above 999 is still X."""
    for pi_class, ceiling in FM_PI_CLASS_MAP.items():
        if pi <= ceiling:
            return pi_class
    return FMPIClass.X


# ── 업그레이드 값 ────────────────────────────────────────────────

class Upgrade(StrEnum):
    STOCK = "Stock"
    STREET = "Street"
    SPORT = "Sport"
    RACE = "Race"
    NA = "N/A"


class DriveType(StrEnum):
    STOCK = "Stock"
    FWD = "FWD"
    RWD = "RWD"
    AWD = "AWD"


BALLAST_NONE = "None"
TRACK_WIDTH_STOCK = "Stock"
GEAR_SLOTS = 11


# ── 필드 타입 (입력 정규화) ──────────────────────────────────────

def _as_text(value):
    """None → "", numbers → str. Anything else goes to the str validator as-is."""
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _as_pi_class(value):
    if isinstance(value, str):
        return value.strip().upper()
    return value


def _as_unit(value):
    if isinstance(value, str):
        return parse_unit(value)
    return value


Text = Annotated[str, BeforeValidator(_as_text)]
PIClassField = Annotated[FMPIClass, BeforeValidator(_as_pi_class)]
Unit = Annotated[
    PressureUnit | SpringRateUnit | LengthUnit | ForceUnit
    | SpeedUnit | WeightUnit | PowerUnit | TorqueUnit,
    BeforeValidator(_as_unit),
]


# ── 공용 구조 ────────────────────────────────────────────────────

@dataclass(frozen=True, config=RECORD_CONFIG)
class FrontAndRearSettings:
    front: Text = ""
    rear: Text = ""
    na: bool = False


@dataclass(frozen=True, config=RECORD_CONFIG)
class FrontAndRearWithUnits(FrontAndRearSettings):
    units: Unit = PressureUnit.BAR


@dataclass(frozen=True, config=RECORD_CONFIG)
class AccelDecelSettings:
    accel: Text = ""
    decel: Text = ""


# ── 튠 설정 ──────────────────────────────────────────────────────

@dataclass(frozen=True, config=RECORD_CONFIG)
class GearTuneSettings:
    """ratios[0] is the final drive, ratios[n] the n-th gear."""
    ratios: tuple[Text, ...] = ("",) * GEAR_SLOTS
    na: bool = False


@dataclass(frozen=True, config=RECORD_CONFIG)
class FMAlignmentTuneSettings:
    camber: FrontAndRearSettings = field(default_factory=FrontAndRearSettings)
    toe: FrontAndRearSettings = field(default_factory=FrontAndRearSettings)
    caster: Text = ""
    steering_angle: Text = ""
    na: bool = False


@dataclass(frozen=True, config=RECORD_CONFIG)
class BrakeTuneSettings:
    na: bool = False
    bias: Text = ""
    pressure: Text = ""


@dataclass(frozen=True, config=RECORD_CONFIG)
class DifferentialTuneSettings:
    front: AccelDecelSettings = field(default_factory=AccelDecelSettings)
    rear: AccelDecelSettings = field(default_factory=AccelDecelSettings)
    center: Text = ""
    na: bool = False


@dataclass(frozen=True, config=RECORD_CONFIG)
class SteeringWheelTuneSettings:
    na: bool = True
    ffb_scale: Text = ""
    steering_lock_range: Text = ""


def _with_units(unit: StrEnum):
    return field(default_factory=lambda: FrontAndRearWithUnits(units=unit))


@dataclass(frozen=True, config=RECORD_CONFIG)
class TuneSettings:
    tires: FrontAndRearWithUnits = _with_units(PressureUnit.BAR)
    gears: GearTuneSettings = field(default_factory=GearTuneSettings)
    alignment: FMAlignmentTuneSettings = field(default_factory=FMAlignmentTuneSettings)
    arb: FrontAndRearSettings = field(default_factory=FrontAndRearSettings)
    springs: FrontAndRearWithUnits = _with_units(SpringRateUnit.KGF)
    ride_height: FrontAndRearWithUnits = _with_units(LengthUnit.CM)
    rebound: FrontAndRearSettings = field(default_factory=FrontAndRearSettings)
    bump: FrontAndRearSettings = field(default_factory=FrontAndRearSettings)
    roll_center_height_offset: FrontAndRearWithUnits = _with_units(LengthUnit.CM)
    anti_geometry_percent: FrontAndRearSettings = field(default_factory=FrontAndRearSettings)
    aero: FrontAndRearWithUnits = _with_units(ForceUnit.KGF)
    brake: BrakeTuneSettings = field(default_factory=BrakeTuneSettings)
    diff: DifferentialTuneSettings = field(default_factory=DifferentialTuneSettings)
    steering_wheel: SteeringWheelTuneSettings = field(default_factory=SteeringWheelTuneSettings)


# ── 업그레이드 그룹 ──────────────────────────────────────────────

@dataclass(frozen=True, config=RECORD_CONFIG)
class FuelAndAirUpgrades:
    fuel_system: Text = Upgrade.STOCK.value
    carburator: Text = Upgrade.STOCK.value
    ignition: Text = Upgrade.STOCK.value
    exhaust: Text = Upgrade.STOCK.value
    air_filter: Text = Upgrade.STOCK.value
    intake_manifold: Text = Upgrade.STOCK.value
    restrictor_plate: Text = ""
    centrifugal_supercharger: Text = Upgrade.STOCK.value
    single_turbo: Text = Upgrade.STOCK.value
    twin_turbo: Text = Upgrade.STOCK.value
    supercharger: Text = Upgrade.STOCK.value
    intercooler: Text = Upgrade.STOCK.value


@dataclass(frozen=True, config=RECORD_CONFIG)
class EngineUpgrades:
    camshaft: Text = Upgrade.STOCK.value
    valves: Text = Upgrade.STOCK.value
    displacement: Text = Upgrade.STOCK.value
    pistons: Text = Upgrade.STOCK.value
    flywheel: Text = Upgrade.STOCK.value
    oil_and_cooling: Text = Upgrade.STOCK.value
    motor_and_battery: Text = Upgrade.NA.value


@dataclass(frozen=True, config=RECORD_CONFIG)
class PlatformAndHandlingUpgrades:
    brakes: Text = Upgrade.STOCK.value
    springs: Text = Upgrade.STOCK.value
    front_arb: Text = Upgrade.STOCK.value
    rear_arb: Text = Upgrade.STOCK.value
    weight_reduction: Text = Upgrade.STOCK.value
    chassis_reinforcement: Text = Upgrade.STOCK.value
    ballast: Text = BALLAST_NONE


@dataclass(frozen=True, config=RECORD_CONFIG)
class TireUpgrades:
    width: FrontAndRearSettings = field(default_factory=FrontAndRearSettings)
    compound: Text = Upgrade.STOCK.value
    track_width: FrontAndRearSettings = field(
        default_factory=lambda: FrontAndRearSettings(front=TRACK_WIDTH_STOCK, rear=TRACK_WIDTH_STOCK)
    )


@dataclass(frozen=True, config=RECORD_CONFIG)
class WheelUpgrades:
    style: Text = ""
    size: FrontAndRearSettings = field(default_factory=FrontAndRearSettings)


@dataclass(frozen=True, config=RECORD_CONFIG)
class DrivetrainUpgrades:
    clutch: Text = Upgrade.STOCK.value
    transmission: Text = Upgrade.STOCK.value
    differential: Text = Upgrade.STOCK.value
    driveline: Text = Upgrade.STOCK.value


@dataclass(frozen=True, config=RECORD_CONFIG)
class AeroAndAppearanceUpgrades:
    front_bumper: Text = ""
    rear_bumper: Text = ""
    rear_wing: Text = ""
    side_skirts: Text = ""
    hood: Text = ""


@dataclass(frozen=True, config=RECORD_CONFIG)
class ConversionSettings:
    aspiration: Text = ""
    body_kit: Text = ""
    engine: Text = ""
    drivetrain: Text = DriveType.STOCK.value


@dataclass(frozen=True, config=RECORD_CONFIG)
class PerformanceUpgrades:
    fuel_and_air: FuelAndAirUpgrades = field(default_factory=FuelAndAirUpgrades)
    engine: EngineUpgrades = field(default_factory=EngineUpgrades)
    platform_and_handling: PlatformAndHandlingUpgrades = field(default_factory=PlatformAndHandlingUpgrades)
    tires: TireUpgrades = field(default_factory=TireUpgrades)
    wheels: WheelUpgrades = field(default_factory=WheelUpgrades)
    drivetrain: DrivetrainUpgrades = field(default_factory=DrivetrainUpgrades)
    aero_and_appearance: AeroAndAppearanceUpgrades = field(default_factory=AeroAndAppearanceUpgrades)
    conversions: ConversionSettings = field(default_factory=ConversionSettings)


def upgrade_pairs(group) -> list[tuple[str, str]]:
    """업그레이드 그룹 → (field name, value) 리스트. Declared field order."""
    return [(f.name, getattr(group, f.name)) for f in fields(group)]


# ── FMSetup ──────────────────────────────────────────────────────

@dataclass(frozen=True, config=RECORD_CONFIG)
class FMSetupStatistics:
    pi: int = 700
    classification: PIClassField = FMPIClass.A
    car_points: Text = ""
    hp: Text = ""
    torque: Text = ""
    weight: Text = ""
    balance: Text = ""
    top_speed: Text = ""
    zero_to_sixty: Text = ""
    zero_to_hundred: Text = ""
    share_code: Text = ""

    @model_validator(mode="before")
    @classmethod
    def derive_classification(cls, data):
        """Blank or missing classification follows pi."""
        if not isinstance(data, dict) or data.get("classification"):
            return data
        data = {key: value for key, value in data.items() if key != "classification"}
        if data.get("pi") not in (None, ""):
            data["classification"] = classify_pi(int(ensure_float(data["pi"])))
        return data


@dataclass(frozen=True, config=RECORD_CONFIG)
class FMSetup:
    year: Text = ""
    make: Text = ""
    model: Text = ""
    stats: FMSetupStatistics = field(default_factory=FMSetupStatistics)
    upgrades: PerformanceUpgrades = field(default_factory=PerformanceUpgrades)
    tune: TuneSettings = field(default_factory=TuneSettings)

    @property
    def name(self) -> str:
        return " ".join(part for part in (self.year, self.make, self.model) if part)


# ── 기본 폼 (버전별) ──────────────────────────────────────────────

def _default_form_v2() -> FMSetup:
    return FMSetup()


_DEFAULT_FORMS = {
    "v2": _default_form_v2,
}

LATEST_FORM_VERSION = "v2"


def default_setup(version: str = LATEST_FORM_VERSION) -> FMSetup:
    """Default form for a form version. Unknown versions fall back to v2."""
    creator = _DEFAULT_FORMS.get(version, _DEFAULT_FORMS["v2"])
    return creator()


# ── dict ↔ FMSetup ───────────────────────────────────────────────

FM_SETUP_ADAPTER = TypeAdapter(FMSetup)


def setup_from_dict(data: dict) -> FMSetup:
    """폼 JSON(camelCase) → FMSetup. Missing keys keep the v2 defaults.

    Raises pydantic.ValidationError (a ValueError) for wrongly shaped input.
    """
    return FM_SETUP_ADAPTER.validate_python(data)


def setup_to_dict(setup: FMSetup) -> dict:
    return FM_SETUP_ADAPTER.dump_python(setup, mode="json", by_alias=True)
